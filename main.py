"""
SwipeFeed - Swipe-to-like Recommendation Feed

Entry point: replays a scripted gesture session against the feed engine.
"""
import argparse
import json
import logging
import sys
from pathlib import Path

import yaml

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent / "src"))


DEMO_SCRIPT = [
    {"drag": [150, 0]},
    {"wait": 400},
    {"drag": [-150, 0]},
    {"undo": True},
    {"wait": 1000},
    {"drag": [0, -150]},
    {"dismiss": True},
    {"wait": 1000},
    {"drag": [40, 20]},
    {"wait": 4000},
    {"undo": True},
]


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="SwipeFeed - gesture session replay",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: config.yaml)",
    )

    parser.add_argument(
        "--items",
        type=Path,
        default=None,
        help="JSON file with a list of products (default: fetch from backend)",
    )

    parser.add_argument(
        "--script",
        type=Path,
        default=None,
        help="YAML gesture script (default: built-in demo)",
    )

    parser.add_argument("--brand", action="append", default=[], help="Brand filter for fetching")
    parser.add_argument("--category", action="append", default=[], help="Category filter for fetching")
    parser.add_argument("--color", action="append", default=[], help="Color filter for fetching")

    parser.add_argument(
        "--api",
        default=None,
        help="Backend base URL (overrides config)",
    )

    parser.add_argument(
        "--offline",
        action="store_true",
        help="Do not sync interactions to the backend",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    return parser.parse_args()


def load_items(path: Path, config):
    """Read products from a JSON file and map them to feed items."""
    from swipefeed.models import item_from_product

    with open(path, 'r') as f:
        products = json.load(f)
    return [item_from_product(p, config.price_tiers) for p in products]


def load_script(path):
    if path is None:
        return DEMO_SCRIPT
    with open(path, 'r') as f:
        return yaml.safe_load(f) or []


def perform_drag(feed, scheduler, dx, dy, steps=10, step_ms=16):
    """Simulate a finger drag from the card centre by (dx, dy)."""
    x0, y0 = 200.0, 400.0
    if not feed.press(x0, y0):
        print("  gesture ignored (feed busy, empty or detail view open)")
        return None
    for i in range(1, steps + 1):
        scheduler.advance(step_ms)
        feed.move(x0 + dx * i / steps, y0 + dy * i / steps)
    return feed.release()


def describe(feed):
    item = feed.current_item
    undo = feed.undo_state
    undo_text = f"armed ({undo.direction.value})" if undo.available else "idle"
    title = f"{item.id} {item.title}" if item else "<empty>"
    return f"cursor={feed.cursor} card={title} animating={feed.animating} undo={undo_text}"


def run_script(feed, scheduler, steps):
    """Replay gesture steps with virtual time."""
    for n, step in enumerate(steps, 1):
        if isinstance(step, str):
            step = {step: True}
        if "drag" in step:
            dx, dy = step["drag"]
            decision = perform_drag(feed, scheduler, float(dx), float(dy))
            label = decision.value if decision else "none"
            print(f"[{n:3d}] drag ({dx}, {dy}) -> {label}")
        elif "swipe" in step:
            from swipefeed.models import Decision
            decision = feed.swipe(Decision(step["swipe"]))
            print(f"[{n:3d}] swipe {step['swipe']} -> {decision.value}")
        elif "undo" in step:
            print(f"[{n:3d}] undo -> {'applied' if feed.undo() else 'no-op'}")
        elif "dismiss" in step:
            feed.dismiss_details()
            print(f"[{n:3d}] details dismissed")
        elif "wait" in step:
            scheduler.advance(float(step["wait"]))
            print(f"[{n:3d}] wait {step['wait']}ms")
        else:
            print(f"[{n:3d}] unknown step {step!r}, skipped")
            continue
        print(f"      {describe(feed)}")


def main():
    """Main entry point."""
    args = parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    from swipefeed import ApiClient, ManualScheduler, PreferenceModel, create_feed, load_config
    from swipefeed.sync import Identity

    # Load config
    config = load_config(args.config)

    # Apply CLI overrides
    if args.api:
        config.backend.base_url = args.api
    if args.offline:
        config.backend.enabled = False

    # Replays run synchronously, so backend calls do too
    api = ApiClient.from_config(config.backend, config.price_tiers, dispatch=lambda fn, *a: fn(*a))
    if api.identity == Identity():
        print("No token or guest id configured, interactions sync anonymously")

    if args.items:
        items = load_items(args.items, config)
    else:
        items = api.fetch_items(args.brand, args.category, args.color)

    model_path = Path(config.ranking.state_path) if config.ranking.state_path else None
    if model_path:
        model = PreferenceModel.load(model_path, config.ranking.learning_rate)
        items = model.rank(items)
    else:
        model = PreferenceModel(config.ranking.learning_rate)

    print("SwipeFeed starting...")
    print(f"  Items: {len(items)}")
    print(f"  Backend: {config.backend.base_url if config.backend.enabled else 'offline'}")
    print()

    scheduler = ManualScheduler()
    feed = create_feed(config, scheduler, items, model=model,
                       api=api if config.backend.enabled else None)
    feed.on_details = lambda item: print(f"      -> show details for {item.id}")

    try:
        run_script(feed, scheduler, load_script(args.script))
    finally:
        feed.close()

    print()
    print(f"Recorded {len(feed.history)} interactions")
    for record in feed.history:
        print(f"  {record.action.value:8s} {record.item_id} tags={list(record.tags)} tier={record.price_tier}")

    if model_path:
        model.save(model_path)
        print(f"Preference weights saved to {model_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
