# -*- coding: utf-8 -*-
from __future__ import annotations
import argparse, json, sys, pathlib
from dataclasses import asdict

import yaml

from .api import mount
from .config import load_map_config
from .logging import init_logging, level_from_cfg
from .regions import RegionCatalog


def _load_groups(p: str):
    path = pathlib.Path(p)
    if not path.exists():
        raise SystemExit(f"groups file not found: {p}")
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)  # JSON is valid YAML
    if isinstance(data, dict):
        data = data.get("groups", data.get("marker_groups"))
    if not isinstance(data, list):
        raise SystemExit(f"{p}: expected a list of marker groups")
    return data


def _load_config(p):
    if p and not pathlib.Path(p).exists():
        raise SystemExit(f"config file not found: {p}")
    try:
        return load_map_config(p)
    except (TypeError, ValueError) as exc:
        raise SystemExit(str(exc)) from exc


def _dump_json(p: str, obj):
    pathlib.Path(p).parent.mkdir(parents=True, exist_ok=True)
    with open(p, "w", encoding="utf-8") as f:
        json.dump(obj, f, ensure_ascii=False, indent=2)


def _parse_initially_visible(v: str):
    if v in ("all", "none"):
        return v
    return [s.strip() for s in v.split(",") if s.strip()]


def cmd_render(args):
    cfg = _load_config(args.config)
    init_logging(args.log_level or level_from_cfg(cfg))
    groups = _load_groups(args.groups)

    session = mount(
        groups,
        config=cfg,
        theme=args.theme,
        layout=args.layout,
        initially_visible=_parse_initially_visible(args.initially_visible),
        on_toggle=True,
    )
    for label in args.toggle or ():
        session.post(label)
    notes = session.drain()
    view = session.render()

    out = {"view": view.to_dict(), "notifications": [asdict(n) for n in notes]}
    if args.out:
        _dump_json(args.out, out)
    if args.png:
        from .viz import save_map_png

        save_map_png(view, args.png)
    if args.print:
        print(json.dumps(out, ensure_ascii=False))
    return 0


def cmd_regions(args):
    cfg = _load_config(args.config)
    catalog = RegionCatalog(cfg)
    for region in catalog.regions():
        lat, lon = region.coordinates
        print(f"{region.code}\t{region.name}\t{lat:g}\t{lon:g}")
    return 0


def make_parser():
    p = argparse.ArgumentParser(prog="markermap")
    sub = p.add_subparsers(dest="cmd", required=True)

    pr = sub.add_parser("render", help="Normalise marker groups and compose a map")
    pr.add_argument("--groups", required=True, help="YAML or JSON list of marker groups")
    pr.add_argument("--config", default=None, help="map config YAML")
    pr.add_argument("--theme", default=None, help="theme name (default: config default_theme)")
    pr.add_argument("--layout", choices=("stacked", "side_by_side"), default=None)
    pr.add_argument("--initially-visible", dest="initially_visible", default="all",
                    help="'all', 'none' or comma separated group labels")
    pr.add_argument("--toggle", action="append", help="group label to toggle (repeatable)")
    pr.add_argument("--out", default=None, help="write the composed view as JSON")
    pr.add_argument("--png", default=None, help="write a raster preview")
    pr.add_argument("--print", action="store_true", help="print JSON result to stdout")
    pr.add_argument("--log-level", dest="log_level", default=None, choices=("none", "info", "debug"))
    pr.set_defaults(func=cmd_render)

    pg = sub.add_parser("regions", help="List the region catalog")
    pg.add_argument("--config", default=None, help="map config YAML")
    pg.set_defaults(func=cmd_regions)

    return p


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    parser = make_parser()
    ns = parser.parse_args(argv)
    return ns.func(ns)


if __name__ == "__main__":
    raise SystemExit(main())
