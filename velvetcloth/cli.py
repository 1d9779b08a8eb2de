"""Command line entry point that runs a cloth scene without a window."""

from __future__ import annotations

import argparse

from .engine import Engine
from .scenes import default_scenes


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="velvetcloth", description="Run a cloth simulation scene."
    )
    parser.add_argument("--list", action="store_true", help="list the scenes and exit")
    parser.add_argument("--scene", type=int, default=0, help="index of the scene to run")
    parser.add_argument(
        "--frames", type=int, default=600, help="number of frames to run"
    )
    return parser


def main(argv=None) -> int:
    parser = _parser()
    args = parser.parse_args(argv)
    scenes = default_scenes()

    if args.list:
        for index, scene in enumerate(scenes):
            print(f"{index}: {scene.name}")
        return 0

    if not 0 <= args.scene < len(scenes):
        parser.error(f"scene index must be between 0 and {len(scenes) - 1}")
    if args.frames < 0:
        parser.error("frames must not be negative")

    scene = scenes[args.scene]
    engine = Engine()
    engine.set_scenes([scene])
    print(f"Running scene: {scene.name}")
    code = engine.run(args.frames)
    game = engine.game
    print(f"Frames: {game.timer.frame_count}")
    print(f"Physics frames: {game.timer.physics_frame_count}")
    return code


if __name__ == "__main__":
    raise SystemExit(main())