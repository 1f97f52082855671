"""GitHub Stars - paginated, rate-limit aware GitHub collection client."""

__version__ = "0.1.0"
