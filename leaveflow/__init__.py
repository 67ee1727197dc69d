"""Employee leave management backend with a two-tier approval workflow."""

__version__ = "0.1.0"
