"""Link-sharing chat bot with interactive list browsing and confirmed deletion."""

__version__ = "0.1.0"
