"""platformrocks - bootstrap CLI for platform.rocks projects."""

__version__ = "0.1.0"
