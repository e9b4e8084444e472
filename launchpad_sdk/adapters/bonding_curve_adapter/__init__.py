from .adapter import BondingCurveAdapter

__all__ = ["BondingCurveAdapter"]
