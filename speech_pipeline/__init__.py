"""Speech audio post-processing for generated storyboard dialogue.

Raw PCM returned by the TTS provider is resolved for byte order, resampled to
48 kHz, normalized under a fixed peak ceiling and wrapped in a stereo WAV.
The CLI scripts at the repository root import from here.
"""
