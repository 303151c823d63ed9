"""Doctor Slides - outline a Google Doc with an LLM and build a Google Slides deck."""

__version__ = "0.1.0"
