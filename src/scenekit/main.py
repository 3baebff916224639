"""Main entry point for scenekit."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import numpy as np

from .io import WavefrontError, load_wavefront
from .layout import SceneLoader, SceneSetup
from .logging_config import setup_logging
from .scene import FrameClock, InputSnapshot
from .scenes import SCENES

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="scenekit",
        description="Scenekit - scene math and mesh loading for real-time demos",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    parser.add_argument(
        "--log-file",
        metavar="PATH",
        help="Also write log output to this file",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    info = commands.add_parser("info", help="Parse a mesh file and print a summary")
    info.add_argument("mesh", type=Path, help="Path to a WaveFront .obj file")

    convert = commands.add_parser("convert", help="Convert a mesh file via trimesh")
    convert.add_argument("mesh", type=Path, help="Path to a WaveFront .obj file")
    convert.add_argument("output", type=Path, help="Output path (.stl, .ply, .glb, ...)")

    simulate = commands.add_parser(
        "simulate", help="Run scene ticks with held keys and print camera state"
    )
    source = simulate.add_mutually_exclusive_group()
    source.add_argument(
        "-s", "--scene",
        choices=list(SCENES.keys()),
        default="camera",
        help="Bundled demo scene (default: camera)",
    )
    source.add_argument(
        "-f", "--file",
        type=Path,
        metavar="YAML",
        help="Scene description to load instead of a bundled demo",
    )
    simulate.add_argument(
        "--ticks",
        type=int,
        default=60,
        help="Number of ticks to run (default: 60)",
    )
    simulate.add_argument(
        "--dt",
        type=float,
        default=None,
        metavar="MS",
        help="Fixed tick length in milliseconds (default: measure wall-clock time)",
    )
    simulate.add_argument(
        "--hold",
        default="",
        metavar="KEYS",
        help="Comma separated keys held for every tick, e.g. 'w,ArrowLeft'",
    )
    simulate.add_argument(
        "--matrices",
        action="store_true",
        help="Print the model-view-projection matrix of every entity at the end",
    )
    return parser.parse_args(argv)


def _print_mesh_info(path: Path) -> None:
    mesh = load_wavefront(path)
    print(f"Mesh '{mesh.name}' ({path})")
    print(f"  vertices:  {mesh.vertex_count}")
    print(f"  normals:   {len(mesh.normals) // 3}")
    print(f"  texcoords: {len(mesh.texcoords) // 2}")
    print(f"  indices:   {mesh.index_count}")
    if mesh.is_triangle_list:
        print(f"  triangles: {mesh.face_count}")
    else:
        print("  triangles: index count is not a multiple of 3")


def _convert_mesh(path: Path, output: Path) -> None:
    mesh = load_wavefront(path)
    mesh.to_trimesh().export(str(output))
    print(f"Saved '{mesh.name}' to {output}")


def _load_setup(args: argparse.Namespace) -> SceneSetup:
    if args.file is not None:
        return SceneLoader().load(args.file)
    return SCENES[args.scene]()


def _format_vector(values: np.ndarray) -> str:
    return " ".join(f"{v:.4f}" for v in values)


def _simulate(args: argparse.Namespace) -> None:
    setup = _load_setup(args)
    keys = [key for key in args.hold.split(",") if key]
    snapshot = InputSnapshot.from_keys(keys, setup.bindings)
    logger.info("Holding %s", sorted(action.value for action in snapshot.active))

    clock = FrameClock()
    clock.tick()
    for _ in range(args.ticks):
        dt_ms = args.dt if args.dt is not None else clock.tick().ms
        setup.scene.update(dt_ms, snapshot)

    print(f"Scene '{setup.name}' after {args.ticks} ticks")
    for camera in setup.scene.cameras:
        print(f"camera {camera.id}")
        print(f"  position {_format_vector(camera.position)}")
        print(f"  rotation {_format_vector(camera.rotation)}")
        if not args.matrices:
            continue
        for entity, mvp in setup.scene.iter_draws(camera):
            print(f"  mvp {entity.id}")
            for row in mvp:
                print(f"    {_format_vector(row)}")


def main(argv: list[str] | None = None) -> int:
    """Run the scenekit command line tool."""
    args = parse_args(argv)
    setup_logging(getattr(logging, args.log_level), args.log_file)

    try:
        if args.command == "info":
            _print_mesh_info(args.mesh)
        elif args.command == "convert":
            _convert_mesh(args.mesh, args.output)
        else:
            _simulate(args)
    except (FileNotFoundError, WavefrontError, ValueError) as exc:
        logger.debug("Command failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
