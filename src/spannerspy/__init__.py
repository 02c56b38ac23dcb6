"""SpannerSpy: ER diagrams for Cloud Spanner schemas."""

__version__ = "0.1.0"
