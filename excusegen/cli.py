#!/usr/bin/env python3
"""
Command line for the excuse generator.

    excusegen serve [--host HOST] [--port PORT] [--reload]
    excusegen pick SITUATION [--tone TONE] [--length LENGTH]
    excusegen stats [--json]
    excusegen favorites list|add|remove|clear ...
    excusegen rate TEXT STARS
    excusegen device-id
"""

import argparse
import json
import sys

from .core import config
from .core.catalog import load_catalog_dir
from .core.errors import ExcuseValidationError
from .core.local_store import LocalStore
from .core.normalize import display_length, display_tone
from .core.selector import select_excuse


def serve_command(args):
    """Run the API with uvicorn."""
    import uvicorn

    print(f"🚀 Starting excuse API on http://{args.host}:{args.port}")
    uvicorn.run("excusegen.api.main:app", host=args.host, port=args.port, reload=args.reload)
    return 0


def pick_command(args):
    """Pick one excuse from the local catalog."""
    catalog = load_catalog_dir(args.catalog_dir or config.CATALOG_DIR)
    record = select_excuse(catalog, args.situation, args.tone, args.length)

    if record is None:
        print(f"❌ No local excuses for situation: {args.situation}")
        if catalog.situations:
            print(f"   Available: {', '.join(catalog.situations)}")
        return 1

    print(record.excuse_text)
    print(f"   Tone: {display_tone(record.tone)} | Length: {display_length(record.length)} | "
          f"Believability: {record.believability_rating}%")
    return 0


def stats_command(args):
    """Show catalog statistics."""
    stats = load_catalog_dir(args.catalog_dir or config.CATALOG_DIR).stats()

    if args.json:
        print(json.dumps({
            "totalSituations": stats.total_situations,
            "totalExcuses": stats.total_excuses,
            "excusesBySituation": stats.excuses_by_situation,
        }, indent=2))
        return 0

    print(f"📚 {stats.total_situations} situations, {stats.total_excuses} excuses")
    for situation, count in stats.excuses_by_situation.items():
        print(f"   - {situation}: {count}")
    return 0


def favorites_command(args):
    """Manage favorites in the local device store."""
    store = LocalStore(args.store)

    if args.action == "list":
        favorites = store.get_favorites()
        if not favorites:
            print("No favorites yet.")
            return 0
        for fav in favorites:
            print(f"{fav.id[:12]}  {fav.excuse}")
        print(f"   {len(favorites)}/{store.max_favorites} favorites")
        return 0

    if args.action == "add":
        result = store.save_favorite(args.text, args.situation or "", args.tone or "", args.length or "")
        if result.limit_reached:
            print(f"❌ Favorites limit of {store.max_favorites} reached. Remove one first.")
            return 1
        if not result.success:
            print("❌ Excuse text is empty")
            return 1
        print("✅ Already in favorites" if result.already_favorited else "✅ Added to favorites")
        return 0

    if args.action == "remove":
        # Accept the short id printed by `favorites list`
        matches = [fav.id for fav in store.get_favorites() if fav.id.startswith(args.favorite_id)]
        if len(matches) != 1:
            print(f"❌ No unique favorite matches id: {args.favorite_id}")
            return 1
        store.remove_favorite(matches[0])
        print("✅ Removed from favorites")
        return 0

    deleted = store.clear_all_favorites()
    print(f"✅ Cleared {deleted} favorites")
    return 0


def rate_command(args):
    """Store the device's own rating for an excuse text."""
    store = LocalStore(args.store)
    try:
        store.save_rating(args.text, args.stars)
    except ExcuseValidationError as e:
        print(f"❌ {e}")
        return 1

    print(f"⭐ Rated {args.stars}/5")
    return 0


def device_id_command(args):
    print(LocalStore(args.store).get_device_id())
    return 0


def build_parser():
    parser = argparse.ArgumentParser(prog="excusegen", description="Excuse generator")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="127.0.0.1", help="Bind address (default: 127.0.0.1)")
    serve.add_argument("--port", type=int, default=8000, help="Port (default: 8000)")
    serve.add_argument("--reload", action="store_true", help="Reload on code changes")
    serve.set_defaults(func=serve_command)

    pick = subparsers.add_parser("pick", help="Pick an excuse from the local catalog")
    pick.add_argument("situation", help="Situation, e.g. 'Late to work'")
    pick.add_argument("--tone", help="Tone label or key, e.g. 'Absurd'")
    pick.add_argument("--length", help="Length label or key, e.g. 'short'")
    pick.add_argument("--catalog-dir", help="Catalog directory (default: CATALOG_DIR)")
    pick.set_defaults(func=pick_command)

    stats = subparsers.add_parser("stats", help="Show catalog statistics")
    stats.add_argument("--json", action="store_true", help="Print JSON")
    stats.add_argument("--catalog-dir", help="Catalog directory (default: CATALOG_DIR)")
    stats.set_defaults(func=stats_command)

    favorites = subparsers.add_parser("favorites", help="Manage local favorites")
    favorites.add_argument("--store", help="Local store file (default: LOCAL_STORE_PATH)")
    actions = favorites.add_subparsers(dest="action", required=True)
    actions.add_parser("list", help="List favorites, newest first")
    add = actions.add_parser("add", help="Add an excuse to favorites")
    add.add_argument("text", help="Excuse text")
    add.add_argument("--situation")
    add.add_argument("--tone")
    add.add_argument("--length")
    remove = actions.add_parser("remove", help="Remove a favorite by id (prefix)")
    remove.add_argument("favorite_id")
    actions.add_parser("clear", help="Remove all favorites")
    favorites.set_defaults(func=favorites_command)

    rate = subparsers.add_parser("rate", help="Rate an excuse text 1-5")
    rate.add_argument("text", help="Excuse text")
    rate.add_argument("stars", type=int, help="Stars, 1-5")
    rate.add_argument("--store", help="Local store file (default: LOCAL_STORE_PATH)")
    rate.set_defaults(func=rate_command)

    device = subparsers.add_parser("device-id", help="Print this device's id")
    device.add_argument("--store", help="Local store file (default: LOCAL_STORE_PATH)")
    device.set_defaults(func=device_id_command)

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
