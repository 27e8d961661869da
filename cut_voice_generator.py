from __future__ import annotations

import argparse

from speech_pipeline.config import load_settings
from speech_pipeline.cuts import generate_cut_voices, summarize_cuts
from speech_pipeline.logging_utils import setup_logging, get_logger

log = get_logger(__name__)


def parse_args() -> argparse.Namespace:
    """Parse CLI arguments for per-cut voice generation."""
    settings = load_settings()
    parser = argparse.ArgumentParser(description="Synthesize dialogue for each storyboard cut with Gemini TTS")
    parser.add_argument("--json_path", type=str, required=True, help="cut list JSON")
    parser.add_argument("--output_dir", type=str, required=True, help="output directory")
    parser.add_argument("--api_key", type=str, default=None, help="Gemini API key (default: GEMINI_API_KEY)")
    parser.add_argument("--language_code", type=str, default="ko-KR", help="speech language (default: ko-KR)")
    parser.add_argument("--workers", type=int, default=settings.workers, help="parallel synthesis workers")
    parser.add_argument("--no_combine", action='store_true', help="do not write combined_all_cuts.wav")
    parser.add_argument("--silence_duration", type=float, default=0.5, help="silence between cuts (seconds)")
    parser.add_argument("--summary", action='store_true', help="only summarize the cut list")
    parser.add_argument("--log_level", type=str, default=None, help="log level (e.g., INFO, DEBUG)")
    return parser.parse_args()


def main() -> None:
    """
    Examples:
      python3 cut_voice_generator.py --json_path cuts.json --output_dir out/voices
      python3 cut_voice_generator.py --json_path cuts.json --output_dir out/voices --no_combine --workers 8
    """
    args = parse_args()
    setup_logging(args.log_level)

    if args.summary:
        log.info("cut list summary", extra=summarize_cuts(args.json_path))
        return

    ok, files = generate_cut_voices(
        json_path=args.json_path,
        output_dir=args.output_dir,
        api_key=args.api_key,
        language_code=args.language_code,
        workers=args.workers,
        combine_audio=not args.no_combine,
        silence_duration=args.silence_duration,
    )
    if not ok:
        log.error("some cuts failed", extra={"written": len(files)})
        raise SystemExit(1)
    log.info("voice generation complete", extra={"written": len(files)})


if __name__ == "__main__":
    main()
