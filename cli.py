#!/usr/bin/env python3
from __future__ import annotations

"""Headless CLI for the landscape noise core.

Sample single points, generate heightfields from presets or JSON configs,
and export them to PNG.
"""

import argparse
import logging
import os
import sys
from typing import Iterable

from noisefield import noise, fbm, turbulence
from landscape import (
    PRESETS, get_preset, load_config, save_config, build_heightfield, save_npz, load_npz,
)
import render

logger = logging.getLogger(__name__)


def _ensure_dir(path: str) -> None:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)


def cmd_sample(args) -> int:
    p = tuple(args.point)
    if args.variant == "noise":
        value = noise(p)
    elif args.variant == "fbm":
        value = fbm(p, args.hurst, args.octaves)
    else:
        value = turbulence(p, args.hurst, args.octaves)
    print(repr(value))
    return 0


def cmd_generate(args) -> int:
    config = load_config(args.config) if args.config else get_preset(args.preset)
    config = config.with_overrides(
        seed=args.seed,
        frequency_factor=args.frequency,
        amplitude_factor=args.amplitude,
        hurst_exponent=args.hurst,
        num_octaves=args.octaves,
        variant=args.variant,
        resolution=args.resolution,
    )
    field = build_heightfield(config, time=args.time)
    _ensure_dir(args.out)
    save_npz(field, args.out)
    print(f"saved {args.out} | {field.summary()}")
    if args.topdown:
        _ensure_dir(args.topdown)
        render.render_topdown(field, scale=args.scale).save(args.topdown)
        print(f"Saved {args.topdown}")
    return 0


def cmd_export(args) -> int:
    field = load_npz(args.field)
    if not (args.topdown or args.height):
        print("nothing to export: pass --topdown and/or --height", file=sys.stderr)
        return 2
    if args.topdown:
        _ensure_dir(args.topdown)
        render.render_topdown(field, scale=args.scale).save(args.topdown)
        print(f"Saved {args.topdown}")
    if args.height:
        _ensure_dir(args.height)
        render.render_height(field, scale=args.scale).save(args.height)
        print(f"Saved {args.height}")
    return 0


def cmd_presets(args) -> int:
    for name, c in PRESETS.items():
        print(f"{name}: {c.variant.value} seed={c.seed:g} freq={c.frequency_factor:g} "
              f"amp={c.amplitude_factor:g} H={c.hurst_exponent:g} octaves={c.num_octaves}")
    return 0


def cmd_config(args) -> int:
    _ensure_dir(args.out)
    save_config(get_preset(args.preset), args.out)
    print(f"wrote preset {args.preset} to {args.out}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Fractal noise landscapes")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = ap.add_subparsers()

    ap_s = sub.add_parser("sample", help="Evaluate noise at one point")
    ap_s.add_argument("--point", nargs=3, type=float, required=True, metavar=("X", "Y", "Z"))
    ap_s.add_argument("--hurst", type=float, default=0.9)
    ap_s.add_argument("--octaves", type=float, default=4,
                      help="Number of octaves (whole number >= 0)")
    ap_s.add_argument("--variant", choices=["noise", "fbm", "turbulence"], default="fbm")
    ap_s.set_defaults(func=cmd_sample)

    ap_g = sub.add_parser("generate", help="Sample a landscape and save it as NPZ")
    src = ap_g.add_mutually_exclusive_group()
    src.add_argument("--config", help="JSON config file")
    src.add_argument("--preset", choices=sorted(PRESETS), default="dirt-jam")
    ap_g.add_argument("--seed", type=float)
    ap_g.add_argument("--frequency", type=float, help="Noise frequency factor")
    ap_g.add_argument("--amplitude", type=float, help="Noise amplitude factor")
    ap_g.add_argument("--hurst", type=float, help="Hurst exponent")
    ap_g.add_argument("--octaves", type=float, help="Number of octaves")
    ap_g.add_argument("--variant", choices=["fbm", "turbulence"])
    ap_g.add_argument("--resolution", type=int, help="Plane subdivisions per side")
    ap_g.add_argument("--time", type=float, default=0.0, help="Animation time (drift)")
    ap_g.add_argument("--topdown", default=None, help="Also write a topdown PNG")
    ap_g.add_argument("--scale", type=int, default=1)
    ap_g.add_argument("--out", default="out/landscape.npz")
    ap_g.set_defaults(func=cmd_generate)

    ap_e = sub.add_parser("export", help="Render a saved landscape to PNG")
    ap_e.add_argument("--field", required=True, help="Landscape NPZ file")
    ap_e.add_argument("--topdown", default=None, help="Color blend PNG path")
    ap_e.add_argument("--height", default=None, help="Grayscale height PNG path")
    ap_e.add_argument("--scale", type=int, default=1)
    ap_e.set_defaults(func=cmd_export)

    ap_p = sub.add_parser("presets", help="List built-in presets")
    ap_p.set_defaults(func=cmd_presets)

    ap_c = sub.add_parser("config", help="Write a preset as an editable JSON config")
    ap_c.add_argument("--preset", choices=sorted(PRESETS), default="dirt-jam")
    ap_c.add_argument("--out", required=True)
    ap_c.set_defaults(func=cmd_config)
    return ap


def main(argv: Iterable[str] | None = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if not hasattr(args, "func"):
        ap.print_help()
        return 0
    try:
        return args.func(args)
    except (ValueError, OSError) as exc:
        logger.debug("command failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
