"""Unit tests for Cart and CartLineItem."""

from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import ValidationError

from cartcore import LineItemNotFoundError
from cartcore.models import Cart, CartLineItem, CartState, normalize_quantity


class TestQuantityNormalization:
    """Tests for the quantity <= 0 -> 1 normalization."""

    @pytest.mark.parametrize("quantity", [0, -5])
    def test_update_quantity_non_positive_reads_back_one(self, cart, quantity) -> None:
        cart = cart.add_line("tee", quantity=3)
        line_id = cart.lines[0].line_id

        updated = cart.update_quantity(line_id, quantity)

        assert updated.line(line_id).quantity == 1

    def test_add_line_normalizes(self, cart) -> None:
        assert cart.add_line("tee", quantity=0).lines[0].quantity == 1

    def test_normalize_quantity(self) -> None:
        assert normalize_quantity(4) == 4
        assert normalize_quantity(0) == 1
        assert normalize_quantity(-5) == 1

    def test_constructor_rejects_non_positive(self) -> None:
        """Test the line item itself enforces quantity >= 1."""
        with pytest.raises(ValidationError):
            CartLineItem(product_id="tee", quantity=0)


class TestCartMutations:
    """Tests for cart mutation methods."""

    def test_mutations_do_not_modify_original(self, cart) -> None:
        updated = cart.add_line("tee")

        assert cart.lines == ()
        assert len(updated.lines) == 1

    def test_mutation_marks_dirty(self, cart) -> None:
        assert cart.state == CartState.CLEAN
        assert cart.add_line("tee").state == CartState.DIRTY

    def test_same_selection_merges(self, cart) -> None:
        """Test adding an identical selection adds to the existing line."""
        cart = cart.add_line("shoe", ["size-10"], 1).add_line("shoe", ("size-10",), 2)

        assert len(cart.lines) == 1
        assert cart.lines[0].quantity == 3

    def test_different_selection_new_line(self, cart) -> None:
        cart = cart.add_line("shoe", ["size-10"]).add_line("shoe", ["size-9"])

        assert len(cart.lines) == 2

    def test_insertion_order_kept(self, cart) -> None:
        cart = cart.add_line("b").add_line("a").add_line("c")

        assert [line.product_id for line in cart.lines] == ["b", "a", "c"]

    def test_quantity_change_clears_subtotal(self, cart) -> None:
        cart = cart.add_line("tee")
        line = cart.lines[0].model_copy(
            update={"resolved_unit_price": Decimal("20.00"), "subtotal": Decimal("20.00")}
        )
        cart = cart.model_copy(update={"lines": (line,)})

        updated = cart.update_quantity(line.line_id, 2)

        assert updated.line(line.line_id).subtotal is None
        assert updated.line(line.line_id).resolved_unit_price == Decimal("20.00")

    def test_reselect_options(self, cart) -> None:
        cart = cart.add_line("shoe", ["size-9"])
        line_id = cart.lines[0].line_id

        updated = cart.reselect_options(line_id, ["size-10"])

        assert updated.line(line_id).option_value_ids == frozenset({"size-10"})
        assert updated.line(line_id).resolved_unit_price is None

    def test_remove_line(self, cart) -> None:
        cart = cart.add_line("tee").add_line("shoe", ["size-10"])

        updated = cart.remove_line(cart.lines[0].line_id)

        assert [line.product_id for line in updated.lines] == ["shoe"]

    def test_unknown_line(self, cart) -> None:
        with pytest.raises(LineItemNotFoundError) as exc_info:
            cart.remove_line("missing")

        assert exc_info.value.cart_code == cart.code
        assert exc_info.value.line_id == "missing"

    def test_clear(self, cart) -> None:
        assert cart.add_line("tee").clear().lines == ()
