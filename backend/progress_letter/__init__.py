"""Progress Letter - IELTS progress-report letter composer."""

__version__ = "1.0.0"
