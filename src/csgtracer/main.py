# csgtracer/main.py
import argparse
import logging
import os
import time

from csgtracer.camera.camera import PerspectiveCamera
from csgtracer.geometry.composite import Union, difference
from csgtracer.geometry.plane import Plane
from csgtracer.geometry.sphere import Sphere
from csgtracer.materials.color_field import ConstantColor
from csgtracer.renderer.image_io import save_image, to_surface
from csgtracer.renderer.light import Light
from csgtracer.renderer.scene import Scene


def build_demo_scene(width: int, height: int):
    """
    Three spheres in front of a camera at the origin looking down +x, on a
    grey floor with a bite taken out of the red one. Returns the scene and
    the rotation handle that spins the green/blue pair about the view axis.
    """
    scene = Scene()
    camera = scene.set_camera(PerspectiveCamera.for_image(width, height, angle=60))
    camera.location_lookat((0, 0, 0), (5, 0, 0))

    red = Sphere(pigment=ConstantColor(1, 0, 0))
    red.translate(5, 0, 0)
    bite = Sphere()
    bite.scale(0.6)
    bite.translate(4.2, -0.5, 0.5)
    scene.add_object(difference(red, bite, pigment=ConstantColor(1, 0, 0)))

    pair = Union()
    green = pair.add(Sphere(pigment=ConstantColor(0, 1, 0)))
    green.scale(0.5, 0.5, 1)
    green.translate(5, 2, 0)
    blue = pair.add(Sphere(pigment=ConstantColor(0, 0, 1)))
    blue.scale(0.5)
    blue.translate(5, 0, 2)
    # Added after the children so the spin reaches both of them
    spin = pair.rotate_x(0)
    scene.add_object(pair)

    floor = scene.add_object(Plane(pigment=ConstantColor(0.6, 0.6, 0.6)))
    floor.translate(0, 0, -1.5)

    scene.add_light(Light((0, -5, 5), (1, 1, 1)))
    return scene, spin


class Application:
    """Renders the demo scene to files and optionally shows it in a pygame window."""
    def __init__(self, width: int, height: int, frames: int, output: str, preview: bool):
        self.width = width
        self.height = height
        self.frames = frames
        self.output = output
        self.preview = preview
        self.scene, self.spin = build_demo_scene(width, height)
        self.screen = None

    def frame_path(self, frame: int) -> str:
        if self.frames == 1:
            return self.output
        root, ext = os.path.splitext(self.output)
        return f"{root}_{frame:04d}{ext}"

    def update(self, frame: int):
        self.spin.degrees = 360.0 * frame / self.frames

    def run(self):
        if self.preview:
            import pygame
            pygame.init()
            self.screen = pygame.display.set_mode((self.width, self.height))
            pygame.display.set_caption("csgtracer")

        print(f"Rendering {self.frames} frame(s) at {self.width}x{self.height}")
        start = time.perf_counter()
        for frame, buffer in enumerate(self.scene.render_frames(self.width, self.height,
                                                                self.frames, self.update)):
            path = save_image(buffer, self.frame_path(frame))
            print(f"Wrote {path}")
            if self.screen is not None and not self.show(buffer):
                break
        print(f"Done in {time.perf_counter() - start:.2f}s")

        if self.screen is not None:
            self.wait_for_close()

    def show(self, buffer) -> bool:
        import pygame
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
        self.screen.blit(to_surface(buffer), (0, 0))
        pygame.display.flip()
        return True

    def wait_for_close(self):
        import pygame
        clock = pygame.time.Clock()
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT or (event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE):
                    running = False
            clock.tick(30)
        pygame.quit()


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render the csgtracer demo scene")
    parser.add_argument("--width", type=int, default=320, help="image width in pixels")
    parser.add_argument("--height", type=int, default=240, help="image height in pixels")
    parser.add_argument("--frames", type=int, default=1, help="number of animation frames")
    parser.add_argument("--output", default="image.ppm",
                        help="output file; the extension picks the format (.ppm, .pgm, .png)")
    parser.add_argument("--preview", action="store_true", help="show frames in a pygame window")
    parser.add_argument("-v", "--verbose", action="store_true", help="log render timings")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(asctime)s %(name)s %(levelname)s: %(message)s")
    if args.frames < 1:
        raise SystemExit("--frames must be at least 1")
    Application(args.width, args.height, args.frames, args.output, args.preview).run()


if __name__ == "__main__":
    main()
