#!/usr/bin/env python3
"""
ppmtrace - A minimal Python ray tracer

Main entry point for rendering scenes.
"""

import argparse
import sys
import time
from dataclasses import replace
from typing import BinaryIO, Iterator

from ppmtrace.vec3 import Vec3, Point3
from ppmtrace.color import Color
from ppmtrace.camera import Camera
from ppmtrace.shapes import Sphere, Scene
from ppmtrace.renderer import Renderer, RenderSettings
from ppmtrace.ppm import PPMWriter, PPMWriteError, SinkUnavailableError, open_sink
from ppmtrace.scene_parser import SceneParseError, load_scene

ASPECT_RATIO = 16.0 / 9.0


def create_sky_scene() -> Scene:
    """An empty scene: only the sky gradient is visible."""
    return Scene()


def create_sphere_scene() -> Scene:
    """A single sphere of radius 0.5 straight ahead of the camera."""
    return Scene.single(Sphere(Point3(0, 0, -1), 0.5))


def gradient_pixels(width: int, height: int) -> Iterator[Color]:
    """Red grows left to right, green top to bottom, over a faint blue."""
    if width < 2 or height < 2:
        raise ValueError(f"Gradient must be at least 2x2 pixels, got {width}x{height}")
    blue = Color(0, 0, 1) * 64.0
    red_factor = 255.0 / (width - 1)
    green_factor = 255.0 / (height - 1)

    for y in range(height):
        for x in range(width):
            c = Color(int(x * red_factor), int(y * green_factor), 0)
            yield c + blue


def write_gradient(sink: BinaryIO, width: int, height: int) -> None:
    with PPMWriter(sink, width, height) as writer:
        writer.write_row(gradient_pixels(width, height))


def vector_demo() -> None:
    """Print the basic vector operations for two sample vectors."""
    p = Vec3(1, 2, 3)
    q = Vec3(2, 1, 0)
    s = p.cross(q)

    print(f"p           = {p}")
    print(f"-p          = {-p}")
    print(f"q           = {q}")
    print(f"p + q       = {p + q}")
    print(f"p - q       = {p - q}")
    print(f"p x q       = {s}")
    print(f"p * q       = {p.dot(q):f}")
    print(f"(p x q) * p = {p.dot(s):f}")
    print(f"(p x q) * q = {q.dot(s):f}")

    p_hat = p.unit()
    q_hat = q.unit()
    print(f"p_hat       = {p_hat}")
    print(f"q_hat       = {q_hat}")
    print(f"||p_hat||   = {p_hat.length():f}")
    print(f"||q_hat||   = {q_hat.length():f}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='ppmtrace - A minimal Python ray tracer',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  python main.py --scene sphere --output sphere.ppm
  python main.py --scene sky --width 640 --output sky.ppm
  python main.py --scene-file scenes/sphere.yaml --threads 4
  python main.py --vectors
        '''
    )

    parser.add_argument('--width', type=int, default=None,
                        help='Image width (default: 1920, 1024 for gradient)')
    parser.add_argument('--height', type=int, default=None,
                        help='Image height (default: derived from 16:9, 1024 for gradient)')
    parser.add_argument('--threads', type=int, default=None,
                        help='Number of render threads (default: 1, or the scene file value)')
    parser.add_argument('--clamp', action='store_true',
                        help='Clamp scaled colors instead of wrapping on overflow')
    parser.add_argument('--output', type=str, default='output/render.ppm', help='Output filename')
    parser.add_argument('--scene', type=str, default='sphere', choices=['sky', 'sphere', 'gradient'],
                        help='Built-in scene to render (default: sphere)')
    parser.add_argument('--scene-file', type=str, default=None,
                        help='Load the scene from a JSON or YAML description instead')
    parser.add_argument('--vectors', action='store_true', help='Print the vector demo and exit')
    return parser


def main(argv=None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    if args.vectors:
        vector_demo()
        return 0

    print("=" * 60)
    print("ppmtrace Ray Tracer")
    print("=" * 60)

    try:
        if args.scene == 'gradient' and args.scene_file is None:
            width = args.width or 1024
            height = args.height or 1024
            print(f"\nWriting gradient {width}x{height} to: {args.output}")
            with open_sink(args.output) as sink:
                write_gradient(sink, width, height)
            print("\nDone!")
            return 0

        if args.scene_file:
            print(f"\nLoading scene: {args.scene_file}")
            world, camera, settings = load_scene(args.scene_file)
            # Command line flags override the file's render section
            overrides = {}
            if args.width:
                overrides['width'] = args.width
                overrides['height'] = args.height or int(args.width / camera.aspect_ratio)
            elif args.height:
                overrides['height'] = args.height
            if args.threads is not None:
                overrides['num_threads'] = args.threads
            if args.clamp:
                overrides['clamp_scaling'] = True
            settings = replace(settings, **overrides)
        else:
            print(f"\nCreating scene: {args.scene}")
            world = create_sphere_scene() if args.scene == 'sphere' else create_sky_scene()
            camera = Camera(aspect_ratio=ASPECT_RATIO)
            width = args.width or 1920
            threads = args.threads if args.threads is not None else 1
            options = dict(num_threads=threads, clamp_scaling=args.clamp)
            if args.height:
                settings = RenderSettings(width=width, height=args.height, **options)
            else:
                settings = RenderSettings.from_width(width, ASPECT_RATIO, **options)

        print(f"  Objects in scene: {len(world)}")
        print(f"\nRender Settings:")
        print(f"  Resolution: {settings.width}x{settings.height}")
        print(f"  Threads: {settings.num_threads}")
        print(f"  Scaling: {'clamp' if settings.clamp_scaling else 'wrap'}")

        renderer = Renderer(settings)

        last_progress = [0]

        def progress_callback(progress: float):
            pct = int(progress * 100)
            if pct > last_progress[0]:
                last_progress[0] = pct
                bar_len = 40
                filled = int(bar_len * progress)
                bar = '█' * filled + '░' * (bar_len - filled)
                print(f'\rRendering: [{bar}] {pct}%', end='', flush=True)

        renderer.set_progress_callback(progress_callback)

        # Open the sink before rendering so an unwritable path produces no work
        with open_sink(args.output) as sink:
            print(f"\nRendering to: {args.output}")
            start_time = time.time()
            renderer.render_to(sink, world, camera)
            elapsed = time.time() - start_time

        print(f"\nRender completed in {elapsed:.2f} seconds")
        if elapsed > 0:
            print(f"  Rays per second: {(settings.width * settings.height) / elapsed:.0f}")

    except SinkUnavailableError as e:
        print(f"Error: {e}. Aborting.", file=sys.stderr)
        return 1
    except SceneParseError as e:
        print(f"Error: invalid scene: {e}", file=sys.stderr)
        return 1
    except (PPMWriteError, OSError, ValueError) as e:
        print(f"\nError: render failed: {e}", file=sys.stderr)
        return 1

    print("\nDone!")
    return 0


if __name__ == '__main__':
    sys.exit(main())
