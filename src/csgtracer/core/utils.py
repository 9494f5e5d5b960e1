# csgtracer/core/utils.py
import math

# Prefer radians internally. These exist so scene code can be written in
# POV-Ray style degrees without ad-hoc conversions.


def deg2rad(deg: float) -> float:
    return deg * math.pi / 180.0


def rad2deg(rad: float) -> float:
    return rad * 180.0 / math.pi


def sind(angle: float) -> float:
    return math.sin(deg2rad(angle))


def cosd(angle: float) -> float:
    return math.cos(deg2rad(angle))


def tand(angle: float) -> float:
    return math.tan(deg2rad(angle))


def asind(arg: float) -> float:
    return rad2deg(math.asin(arg))


def acosd(arg: float) -> float:
    return rad2deg(math.acos(arg))


def atand(arg: float) -> float:
    return rad2deg(math.atan(arg))


def atan2d(y: float, x: float) -> float:
    """
    Quadrant-correct inverse tangent in degrees, from -180 to +180.
    """
    return rad2deg(math.atan2(y, x))
