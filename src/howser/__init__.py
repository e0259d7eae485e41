"""howser — validates Markdown documents against Markdown prescriptions."""

__version__ = "0.1.0"
