"""
Test suite for fluxor_core.payment_uri — mixin:// locator decoding.

Covers:
  - Full locator decoding and wire dict
  - Optional parameters defaulting to ""
  - Recipient and amount validation
  - Malformed URI syntax
  - Query decoding details (percent / plus, duplicates)
"""

import dataclasses
import unittest

from fluxor_core.payment_uri import DecodeError, SwapTx, decode_swap_tx

LOCATOR = "mixin://mixin.one/pay/abc-123?asset=X&amount=5.5&memo=m1&trace=t1"


class TestDecodeSwapTx(unittest.TestCase):

    def test_full_locator(self):
        tx = decode_swap_tx(LOCATOR)
        self.assertEqual(tx, SwapTx(
            trace="t1", payee="abc-123", asset="X",
            amount="5.5", memo="m1", order_id="m1",
        ))

    def test_to_dict_uses_wire_keys(self):
        d = decode_swap_tx(LOCATOR).to_dict()
        self.assertEqual(d, {
            "trace": "t1", "payee": "abc-123", "asset": "X",
            "amount": "5.5", "memo": "m1", "orderId": "m1",
        })

    def test_order_id_mirrors_memo(self):
        tx = decode_swap_tx("mixin://mixin.one/pay/u1?amount=1&memo=abc")
        self.assertEqual(tx.order_id, tx.memo)

    def test_optional_params_default_empty(self):
        tx = decode_swap_tx("mixin://mixin.one/pay/u1?amount=0.1")
        self.assertEqual(tx.trace, "")
        self.assertEqual(tx.asset, "")
        self.assertEqual(tx.memo, "")
        self.assertEqual(tx.order_id, "")

    def test_amount_not_coerced(self):
        tx = decode_swap_tx("mixin://mixin.one/pay/u1?amount=0.00000100")
        self.assertEqual(tx.amount, "0.00000100")

    def test_other_scheme_with_host(self):
        tx = decode_swap_tx("https://mixin.one/pay/u1?amount=2")
        self.assertEqual(tx.payee, "u1")

    def test_pay_segment_deeper_in_path(self):
        tx = decode_swap_tx("mixin://mixin.one/x/pay/u1?amount=2")
        self.assertEqual(tx.payee, "u1")

    def test_recipient_is_percent_encoded(self):
        tx = decode_swap_tx("mixin://mixin.one/pay/abc def?amount=1")
        self.assertEqual(tx.payee, "abc%20def")

    def test_recipient_non_ascii_encoded_as_utf8(self):
        tx = decode_swap_tx("mixin://mixin.one/pay/caf\u00e9?amount=1")
        self.assertEqual(tx.payee, "caf%C3%A9")

    def test_recipient_existing_escape_kept(self):
        tx = decode_swap_tx("mixin://mixin.one/pay/abc%20def?amount=1")
        self.assertEqual(tx.payee, "abc%20def")
        tx = decode_swap_tx("mixin://mixin.one/pay/a:b@c!$?amount=1")
        self.assertEqual(tx.payee, "a:b@c!$")

    def test_query_is_form_decoded(self):
        tx = decode_swap_tx("mixin://mixin.one/pay/u1?amount=1&memo=hello%20big+world")
        self.assertEqual(tx.memo, "hello big world")

    def test_first_duplicate_wins(self):
        tx = decode_swap_tx("mixin://mixin.one/pay/u1?amount=1&amount=2")
        self.assertEqual(tx.amount, "1")

    def test_result_is_immutable(self):
        tx = decode_swap_tx(LOCATOR)
        with self.assertRaises(dataclasses.FrozenInstanceError):
            tx.amount = "6"  # type: ignore[misc]


class TestDecodeErrors(unittest.TestCase):

    def assertDecodeError(self, locator, fragment):
        with self.assertRaises(DecodeError) as ctx:
            decode_swap_tx(locator)
        self.assertIn(fragment, str(ctx.exception))
        self.assertTrue(str(ctx.exception).startswith("Failed to decode tx: "))
        return ctx.exception

    def test_missing_pay_segment(self):
        self.assertDecodeError(
            "mixin://mixin.one/send/abc?amount=1", "invalid recipient in path",
        )

    def test_empty_recipient(self):
        self.assertDecodeError("mixin://mixin.one/pay/?amount=1", "invalid recipient")

    def test_missing_amount(self):
        self.assertDecodeError("mixin://mixin.one/pay/u1?memo=x", "invalid amount in query")

    def test_empty_amount(self):
        self.assertDecodeError("mixin://mixin.one/pay/u1?amount=&memo=x", "invalid amount")

    def test_not_a_uri(self):
        self.assertDecodeError("definitely not a locator", "malformed locator")

    def test_bad_ipv6_host(self):
        self.assertDecodeError("mixin://[::1/pay/u1?amount=1", "malformed locator")

    def test_bad_port(self):
        self.assertDecodeError("mixin://mixin.one:99999/pay/u1?amount=1", "malformed locator")

    def test_non_string(self):
        with self.assertRaises(DecodeError):
            decode_swap_tx(None)  # type: ignore[arg-type]

    def test_cause_and_value_error(self):
        err = self.assertDecodeError("mixin://mixin.one/pay/u1", "invalid amount")
        self.assertIsInstance(err, ValueError)
        self.assertEqual(err.cause, "invalid amount in query")


if __name__ == "__main__":
    unittest.main()
