"""
Command line access to the image resolver.

Examples::

    wpimage meta 42
    wpimage meta hero --post 12 --field alt
    wpimage element 42 --size medium --attr class=hero --attr data-id=42
    wpimage element hero --post 12 --source "medium=(max-width: 480px)" --source "large=(min-width: 481px)"
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Dict, List, Optional

from wpimage.config import DEFAULT_CONFIG_FILE, apply_config, load_config
from wpimage.image_resolver import ImageResolver
from wpimage.stores.wordpress_rest import WordPressRestStore


def parse_reference(value: str) -> Any:
    """Digits are an id; anything else is a custom field name."""
    return int(value) if value.isdecimal() else value


def parse_pairs(items: Optional[List[str]], option: str) -> Dict[str, str]:
    pairs: Dict[str, str] = {}
    for item in items or []:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise argparse.ArgumentTypeError(f"{option} expects KEY=VALUE, got {item!r}")
        pairs[key.strip()] = value
    return pairs


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="wpimage", description="Resolve WordPress images and render their markup.")
    parser.add_argument("--config", default=DEFAULT_CONFIG_FILE, help="Path to the JSON configuration file.")
    parser.add_argument("--verbose", action="store_true", help="Log debug messages.")
    sub = parser.add_subparsers(dest="command", required=True)

    meta = sub.add_parser("meta", help="Print the image meta data as JSON.")
    meta.add_argument("reference", help="Attachment or record id, or a custom field name.")
    meta.add_argument("--post", type=int, help="Record to read the field or featured image from.")
    meta.add_argument("--field", help="Print a single meta field.")

    element = sub.add_parser("element", help="Print an <img> or <picture> element.")
    element.add_argument("reference", help="Attachment or record id, or a custom field name.")
    element.add_argument("--post", type=int, help="Record to read the field or featured image from.")
    element.add_argument("--size", help="Image size (defaults to images.default_size).")
    element.add_argument("--attr", action="append", metavar="KEY=VALUE", help="HTML attribute, repeatable.")
    element.add_argument("--data-uri", action="store_true", help="Inline the image as a data URI.")
    element.add_argument("--no-dimensions", action="store_true", help="Omit width and height.")
    element.add_argument(
        "--source",
        action="append",
        metavar="SIZE=MEDIA",
        help="Responsive source, repeatable; the last one sizes the fallback image.",
    )
    return parser


def run(args: argparse.Namespace, store: Any, config: Dict[str, Any]) -> int:
    image = ImageResolver(parse_reference(args.reference), args.post, store=store)
    if not image.resolved:
        print(f"No image found for {args.reference!r}", file=sys.stderr)
        return 1

    if args.command == "meta":
        if args.field:
            value = image.meta(args.field)
            if value is None:
                print(f"Unknown meta field {args.field!r}", file=sys.stderr)
                return 1
            print(value)
        else:
            print(json.dumps(image.meta(), ensure_ascii=False, indent=2))
        return 0

    attributes = parse_pairs(args.attr, "--attr")
    sources = parse_pairs(args.source, "--source")
    size: Any = sources or args.size or config["images"]["default_size"]
    markup = image.element(size, attributes, data_uri=args.data_uri, dimensions=not args.no_dimensions)
    if markup is None:
        print(f"Size {size!r} is not available", file=sys.stderr)
        return 1
    print(markup)
    return 0


def main(argv: Optional[List[str]] = None, *, store: Any = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    config = load_config(config_file=args.config)
    if args.verbose:
        config["logging"]["level"] = "DEBUG"
    apply_config(config)

    if store is None:
        if not config["wordpress"]["base_url"]:
            parser.error("wordpress.base_url is not configured (set WP_BASE_URL or use --config)")
        store = WordPressRestStore(config["wordpress"])

    try:
        return run(args, store, config)
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))
    return 2


if __name__ == "__main__":
    sys.exit(main())
