"""
Main entry point for running hifi-audio-data as a module.

This allows the package to be executed with:
    python -m hifi_audio_data
"""

from .cli import cli_main

if __name__ == "__main__":
    cli_main()
