"""
Tests for the cart and search wire models.
"""
import pytest
from pydantic import ValidationError

from pizza_assist.schemas import (
    AddPizzaAction,
    CartPlan,
    CartRequest,
    ClearCartAction,
    SearchResult,
    UpdateSizeAction,
)


class TestCartRequest:

    def test_defaults(self):
        request = CartRequest(utterance="one margherita")
        assert request.user_id == "demo"
        assert request.cart is None

    def test_camel_case_input(self):
        request = CartRequest.model_validate({
            "utterance": "make it large",
            "userId": "guest",
            "cart": [{"idx": 0, "specialId": 2, "size": 12, "toppingIds": [7], "label": "Pepperoni"}],
        })
        assert request.user_id == "guest"
        assert request.cart[0].special_id == 2
        assert request.cart[0].topping_ids == [7]

    def test_empty_utterance_rejected(self):
        with pytest.raises(ValidationError):
            CartRequest(utterance="")


class TestCartPlan:

    def test_serializes_camel_case(self):
        plan = CartPlan(actions=[
            AddPizzaAction(special_id=1, quantity=2, size=14, topping_ids=[7]),
            ClearCartAction(),
        ])
        assert plan.model_dump(by_alias=True) == {
            "actions": [
                {"type": "add_pizza", "specialId": 1, "quantity": 2, "size": 14, "toppingIds": [7]},
                {"type": "clear_cart"},
            ]
        }

    def test_discriminated_by_type(self):
        plan = CartPlan.model_validate({
            "actions": [
                {"type": "clear_cart"},
                {"type": "update_size", "targetIdx": 0, "newSize": 16},
            ]
        })
        assert plan.actions == [ClearCartAction(), UpdateSizeAction(target_idx=0, new_size=16)]

    def test_unknown_type_rejected_by_strict_model(self):
        with pytest.raises(ValidationError):
            CartPlan.model_validate({"actions": [{"type": "order_drink"}]})

    def test_empty_plan_is_valid(self):
        assert CartPlan().model_dump() == {"actions": []}


class TestSearchResult:

    def test_topping_serialization(self):
        result = SearchResult(id=7, name="Extra cheese", kind="topping", price=2.5)
        assert result.model_dump(by_alias=True) == {
            "id": 7,
            "name": "Extra cheese",
            "kind": "topping",
            "description": None,
            "price": 2.5,
            "sizePrices": None,
        }

    def test_kind_is_restricted(self):
        with pytest.raises(ValidationError):
            SearchResult(id=1, name="Cola", kind="drink")
