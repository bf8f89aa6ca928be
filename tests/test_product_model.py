# tests/test_product_model.py

"""Tests for the Product dataclass."""

import unittest

from cardtrend.models.product import Product


class TestProductModel(unittest.TestCase):
    """Product dataclass unit tests."""

    def test_defaults(self) -> None:
        """Derived fields start empty or zero."""
        product = Product(url="https://cm/1")
        self.assertEqual(product.from_price, "")
        self.assertEqual(product.from_price_val, 0.0)
        self.assertEqual(product.name, "")
        self.assertEqual(product.image_url, "")
        self.assertEqual(product.price_trend, "")
        self.assertEqual(product.price_trend_val, 0.0)
        self.assertEqual(product.change_percent, 0.0)
        self.assertEqual(product.extra, {})

    def test_extra_not_shared(self) -> None:
        """Each product gets its own extra dict."""
        a = Product(url="a")
        b = Product(url="b")
        a.extra["notes"] = "x"
        self.assertEqual(b.extra, {})

    def test_equality(self) -> None:
        """Two products with identical fields are equal."""
        self.assertEqual(
            Product(url="a", from_price="1"),
            Product(url="a", from_price="1"),
        )

    def test_inequality_different_change(self) -> None:
        """Products differing in change are not equal."""
        self.assertNotEqual(
            Product(url="a", change_percent=1.0),
            Product(url="a", change_percent=2.0),
        )


if __name__ == "__main__":
    unittest.main()
