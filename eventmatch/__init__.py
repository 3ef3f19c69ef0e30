"""Event attendee matching: pairwise scoring, top-N selection and explanations."""

__version__ = "0.1.0"
