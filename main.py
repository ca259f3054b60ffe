"""
AirCast - Cast spells by drawing shapes in the air with a pinch

Entry point for the application.
"""
import argparse
import logging
import sys
import time
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent / "src"))


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="AirCast - Pinch-drawn gesture spellcasting",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: config.yaml)",
    )

    parser.add_argument(
        "--element",
        choices=["fire", "water", "lightning", "air"],
        default=None,
        help="Active element / spell kit (overrides config)",
    )

    parser.add_argument(
        "--mirror",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Mirror the camera horizontally (overrides config)",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Show camera feed with cursor and stroke overlay",
    )

    return parser.parse_args()


def run_webcam_debug(config):
    """
    Run in debug mode - OpenCV window with the live stroke and last result.
    The canvas is the camera frame itself, so strokes are in frame pixels.
    """
    import cv2
    from casting import CastingPipeline, Element, Loadout, ScreenMapper
    from webcam import HandTracker, draw_overlay

    tracker = HandTracker(config)
    loadout = Loadout.for_element(Element.parse(config.casting.element))
    pipeline = CastingPipeline(
        config.gestures,
        loadout,
        on_cast=lambda spell: print(f"CAST: {spell.name}"),
        on_cooldown_rejected=lambda spell, left: print(f"{spell.name} on cooldown ({left:.1f}s)"),
    )

    print("Starting webcam debug mode...")
    print("Press 'q' to quit, 'r' to reset cooldowns")
    print("-" * 40)

    if not tracker.start():
        print("ERROR: Could not start hand tracking")
        return 1

    last_result = ""
    try:
        while True:
            ok, landmarks = tracker.capture()
            frame = tracker.last_frame
            if not ok or frame is None:
                continue

            h, w = frame.shape[:2]
            mapper = ScreenMapper.identity(w, h, mirrored=config.display.mirrored)
            outcome = pipeline.process_frame(landmarks, mapper, time.perf_counter())

            if outcome.classification is not None:
                c = outcome.classification
                last_result = f"{c.label.name} ({c.method}, {c.score:.3f})"

            frame = draw_overlay(
                frame, landmarks, outcome.cursor, outcome.path, outcome.pinching,
                mirrored=config.display.mirrored,
            )
            info_lines = [
                f"Element: {loadout.name}",
                f"State: {outcome.draw_state.name}",
                f"Last: {last_result}",
            ]
            for i, line in enumerate(info_lines):
                cv2.putText(
                    frame, line, (10, 30 + i * 25),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.6, (255, 255, 255), 1
                )

            cv2.imshow("AirCast Debug", frame)

            key = cv2.waitKey(1) & 0xFF
            if key == ord('q'):
                break
            if key == ord('r'):
                pipeline.reset()
                print("Cooldowns reset")

    finally:
        tracker.stop()
        cv2.destroyAllWindows()

    return 0


def run_worker_mode(config):
    """Run the casting worker headless; casts are printed for the game layer."""
    import signal
    import atexit
    from PyQt5.QtCore import QCoreApplication, QThread, Qt
    from webcam import CastingWorker

    app = QCoreApplication(sys.argv)

    thread = QThread()
    worker = CastingWorker(config)
    worker.moveToThread(thread)

    def cleanup():
        """Ensure camera is released on exit."""
        print("\nCleaning up camera resources...")
        worker.stop_process()
        thread.quit()
        thread.wait(2000)
        print("Cleanup complete.")

    atexit.register(cleanup)

    def signal_handler(signum, frame):
        """Handle Ctrl+C and kill signals gracefully."""
        print(f"\nReceived signal {signum}, shutting down...")
        app.quit()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    def handle_cast(spell):
        status = f"{spell.name}!"
        if spell.damage:
            status += f" ({spell.damage} Dmg)"
        if spell.heal:
            status += f" (+{spell.heal} HP)"
        print(f"Action: {status}")

    thread.started.connect(worker.start_process)
    worker.spell_cast.connect(handle_cast, Qt.QueuedConnection)
    worker.cooldown_rejected.connect(
        lambda spell, left: print(f"Action: {spell.name} on Cooldown! ({left:.1f}s)"), Qt.QueuedConnection
    )
    worker.draw_state_changed.connect(lambda state: print(f"State: {state.name}"), Qt.QueuedConnection)
    worker.error.connect(lambda msg: print(f"WORKER ERROR: {msg}"), Qt.QueuedConnection)

    thread.start()

    try:
        result = app.exec_()
    finally:
        cleanup()
        atexit.unregister(cleanup)

    return result


def main():
    """Main entry point."""
    args = parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    from casting import load_config
    try:
        config = load_config(args.config)
    except ValueError as e:
        print(f"ERROR: Invalid config: {e}")
        return 2

    # Apply CLI overrides
    if args.element:
        config.casting.element = args.element
    if args.mirror is not None:
        config.display.mirrored = args.mirror

    print("AirCast starting...")
    print(f"  Element: {config.casting.element}")
    print(f"  Mirrored: {config.display.mirrored}")
    print(f"  Debug: {args.debug}")
    print()

    if args.debug:
        return run_webcam_debug(config)
    return run_worker_mode(config)


if __name__ == "__main__":
    sys.exit(main())
