"""SmartOps Core: simulated operations metrics, chat assistant and site API."""

__version__ = "1.0.0"
