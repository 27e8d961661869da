from __future__ import annotations

import argparse

from speech_pipeline.audio import DEFAULT_SOURCE_RATE, decode_payload, parse_sample_rate, pcm_to_wav
from speech_pipeline.errors import EmptyPayloadError
from speech_pipeline.logging_utils import setup_logging, get_logger
from speech_pipeline.types import WavContainer

log = get_logger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    """Parse CLI arguments for offline PCM conversion."""
    parser = argparse.ArgumentParser(description="Wrap raw mono 16-bit PCM as a 48 kHz stereo WAV")
    parser.add_argument("--input", type=str, required=True, help="raw PCM file (or base64 text with --base64)")
    parser.add_argument("--output", type=str, required=True, help="output WAV path")
    parser.add_argument("--base64", action='store_true', help="input file holds base64 text")
    rate = parser.add_mutually_exclusive_group()
    rate.add_argument("--mime_type", type=str, default=None, help="provider MIME type, e.g. audio/L16;rate=24000")
    rate.add_argument("--sample_rate", type=int, default=None, help="source sample rate (default: 24000)")
    parser.add_argument("--volume", type=float, default=1.0, help="volume multiplier (default: 1.0)")
    parser.add_argument("--log_level", type=str, default=None, help="log level (e.g., INFO, DEBUG)")
    return parser.parse_args(argv)


def convert_file(input_path: str, output_path: str, is_base64: bool = False,
                 sample_rate: int = DEFAULT_SOURCE_RATE, volume: float = 1.0) -> WavContainer:
    with open(input_path, 'rb') as f:
        data = f.read()
    if is_base64:
        try:
            text = data.decode('ascii')
        except UnicodeDecodeError as e:
            raise EmptyPayloadError(f"base64 input is not ASCII text: {e}")
        raw = decode_payload(text.strip())
    else:
        raw = data
    container = pcm_to_wav(raw, source_rate=sample_rate, volume_multiplier=volume)
    with open(output_path, 'wb') as f:
        f.write(container.data)
    return container


def main(argv=None) -> None:
    """
    Examples:
      python3 pcm_to_wav.py --input speech.pcm --output speech.wav
      python3 pcm_to_wav.py --input speech.b64 --base64 --mime_type "audio/L16;codec=pcm;rate=24000" --output speech.wav
    """
    args = parse_args(argv)
    setup_logging(args.log_level)
    sample_rate = args.sample_rate or parse_sample_rate(args.mime_type)
    container = convert_file(args.input, args.output, is_base64=args.base64,
                             sample_rate=sample_rate, volume=args.volume)
    log.info("wav written", extra={
        "file": args.output, "samples": container.sample_count,
        "seconds": round(container.duration_seconds, 3), "bytes": container.byte_length,
    })


if __name__ == "__main__":
    main()
