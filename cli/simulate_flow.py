"""Tutorial flow simulator CLI.

Replays a scripted sequence of navigation / layout / tap events against a
fresh ``TutorialEngine`` and prints the overlay after each event. Useful for
checking a new onboarding script without launching the app.

Script format (JSON): either a list of events, or an object with an optional
``flow`` (list of steps replacing the default onboarding tour) and
``events``::

  {"flow": [{"id": "s1", "screen": "Wardrobe", "anchor_id": "a", "text_key": "k"}],
   "events": [
     {"op": "start"},
     {"op": "screen", "name": "Wardrobe"},
     {"op": "anchor", "id": "a", "x": 10, "y": 10, "width": 50, "height": 50},
     {"op": "advance"}
   ]}

Ops: start, stop, advance, replay, enable, disable, screen, anchor,
remove_anchor, queue_front (``steps``), prompt (``anchor_id``, ``text_key``).

Exit code 0 on success, 2 when the script cannot be read or is malformed.

Example:
  python -m cli.simulate_flow --script events.json --viewport 390x844 --json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from coach.i18n.translator import Translator
from coach.tour.anchors import Geometry
from coach.tour.engine import TutorialEngine
from coach.tour.placement import Viewport, compute_placement
from coach.tour.steps import Step


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Replay tutorial events and print overlay state")
    p.add_argument("--script", required=True, help="JSON file with the event script")
    p.add_argument(
        "--viewport",
        default="390x844",
        help="Viewport size WIDTHxHEIGHT used for bubble placement (default: 390x844)",
    )
    p.add_argument("--locale", default="en", help="Locale used to resolve step text")
    p.add_argument("--json", action="store_true", help="Emit JSON instead of human-readable text")
    p.add_argument("-v", "--verbose", action="store_true", help="Log engine transitions")
    return p.parse_args(argv)


def parse_viewport(text: str) -> Viewport:
    try:
        w, h = text.lower().split("x", 1)
        return Viewport(float(w), float(h))
    except ValueError:
        raise ValueError(f"Invalid viewport {text!r}; expected WIDTHxHEIGHT") from None


def _step_from_dict(data: Dict[str, Any]) -> Step:
    try:
        return Step(
            id=str(data["id"]),
            screen=str(data["screen"]),
            anchor_id=str(data["anchor_id"]),
            text_key=str(data.get("text_key", "")),
            placement=data.get("placement"),
        )
    except KeyError as exc:
        raise ValueError(f"Step is missing field {exc.args[0]!r}: {data}") from None


def load_script(path: Path) -> Tuple[Optional[List[Step]], List[Dict[str, Any]]]:
    raw = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(raw, list):
        return None, raw
    if not isinstance(raw, dict) or not isinstance(raw.get("events"), list):
        raise ValueError("Script must be a list of events or an object with 'events'")
    flow = raw.get("flow")
    steps = [_step_from_dict(s) for s in flow] if flow is not None else None
    return steps, raw["events"]


def apply_event(engine: TutorialEngine, event: Dict[str, Any]) -> None:
    op = event.get("op")
    if op == "start":
        engine.start()
    elif op == "stop":
        engine.stop()
    elif op == "advance":
        engine.advance()
    elif op == "replay":
        engine.replay()
    elif op == "enable":
        engine.set_enabled(True)
    elif op == "disable":
        engine.set_enabled(False)
    elif op == "screen":
        engine.on_screen(str(event["name"]))
    elif op == "anchor":
        engine.register_anchor(str(event["id"]), Geometry.from_dict(event))
    elif op == "remove_anchor":
        engine.remove_anchor(str(event["id"]))
    elif op == "queue_front":
        engine.queue_front(_step_from_dict(s) for s in event.get("steps", []))
    elif op == "prompt":
        engine.prompt(
            str(event["anchor_id"]),
            str(event.get("text_key", "")),
            screen=event.get("screen"),
            placement=event.get("placement"),
        )
    else:
        raise ValueError(f"Unknown op: {op!r}")


def snapshot(
    engine: TutorialEngine, viewport: Viewport, translator: Translator
) -> Dict[str, Any]:
    overlay = engine.overlay
    row: Dict[str, Any] = {
        "running": engine.is_running(),
        "current": engine.current_step.id if engine.current_step else None,
        "pending": [s.id for s in engine.pending_steps],
        "overlay": overlay.to_dict(),
    }
    if overlay.visible and overlay.target is not None:
        placed = compute_placement(overlay.target, viewport, overlay.placement)
        row["text"] = translator.t(overlay.text_key, overlay.text_key)
        row["side"] = placed.side.value
        row["bubble"] = {
            "x": placed.bubble.x,
            "y": placed.bubble.y,
            "width": placed.bubble.width,
            "height": placed.bubble.height,
        }
    return row


def simulate(
    events: Sequence[Dict[str, Any]],
    *,
    flow: Optional[Sequence[Step]] = None,
    viewport: Viewport = Viewport(390, 844),
    locale: str = "en",
) -> List[Dict[str, Any]]:
    engine = TutorialEngine(flow)
    translator = Translator(locale=locale)
    rows: List[Dict[str, Any]] = []
    for idx, event in enumerate(events):
        if not isinstance(event, dict):
            raise ValueError(f"Event #{idx} is not an object: {event!r}")
        try:
            apply_event(engine, event)
        except KeyError as exc:
            raise ValueError(f"Event #{idx} is missing field {exc.args[0]!r}") from None
        row = snapshot(engine, viewport, translator)
        row["event"] = event.get("op")
        rows.append(row)
    return rows


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        viewport = parse_viewport(args.viewport)
        flow, events = load_script(Path(args.script))
        rows = simulate(events, flow=flow, viewport=viewport, locale=args.locale)
    except (OSError, ValueError) as exc:
        print(f"Cannot run script {args.script}: {exc}", file=sys.stderr)
        return 2
    if args.json:
        print(json.dumps(rows, ensure_ascii=False, indent=2))
        return 0
    for idx, row in enumerate(rows, start=1):
        if row["overlay"]["visible"]:
            b = row["bubble"]
            state = (
                f"SHOW {row['current']} [{row['side']}] at ({b['x']:.0f},{b['y']:.0f}): "
                f"{row['text']}"
            )
        elif row["running"]:
            state = f"waiting on {row['current']}"
        else:
            state = "idle"
        print(f"{idx:>3} {row['event']:<14} {state}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
