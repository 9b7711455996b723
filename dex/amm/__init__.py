"""AMM (Automated Market Maker) math."""

from dex.amm.constant_product import ConstantProduct, constant_product, quote

__all__ = [
    "ConstantProduct",
    "constant_product",
    "quote",
]
