"""R&D job manager: SPK/SPD work-order board with live updates and a Sheets mirror."""

__version__ = "1.0.0"
