from conftest import make_axis
from models.catalog import Product
from models.selection import SelectionState
from variants.selection import SelectionController


# --- SelectionState --- #


def test_select_returns_new_state(tee_product):
    empty = SelectionState()
    red = tee_product.option(11)
    selected = empty.select(1, red)
    assert len(empty) == 0
    assert selected.option_for(1) is red
    assert selected.is_axis_selected(1)
    assert not selected.is_axis_selected(2)


def test_select_replaces_and_keeps_axis_position(tee_product):
    state = SelectionState().select(1, tee_product.option(11)).select(2, tee_product.option(21))
    state = state.select(1, tee_product.option(13))
    assert state.axis_ids == (1, 2)
    assert state.option_ids == (13, 21)
    assert len(state) == 2


def test_deselect_and_clear(tee_product):
    state = SelectionState.from_options([tee_product.option(11), tee_product.option(22)])
    assert state.deselect(1).option_ids == (22,)
    assert state.deselect(9) == state
    assert len(state.clear()) == 0


def test_from_options_keys_by_option_axis(tee_product):
    state = SelectionState.from_options([tee_product.option(22), tee_product.option(12)])
    assert state.axis_ids == (2, 1)
    assert state.option_for(2).name == "L"


# --- SelectionController --- #


def test_controller_select_and_resolve(tee_product):
    controller = SelectionController(tee_product)
    assert controller.select(1, 11)
    assert controller.select(2, 22)
    resolved = controller.resolve()
    assert resolved.combination_id == 102
    assert controller.is_axis_selected(1)


def test_controller_rejects_sold_out_option_when_tracking(single_color_product):
    controller = SelectionController(single_color_product)
    assert not controller.select(1, 2)
    assert not controller.is_axis_selected(1)
    views = {view.name: view for view in controller.option_states(1)}
    assert not views["Blue"].selectable
    assert views["Red"].selectable


def test_controller_rejects_option_without_stock_count_when_tracking():
    size = make_axis(1, "Size", (1, "S", 0.0, None), (2, "M", 0.0, 2))
    controller = SelectionController(Product(product_id=13, name="Apron", base_price=20.0, axes=(size,)))
    assert not controller.select(1, 1)
    assert controller.select(1, 2)


def test_controller_allows_sold_out_option_when_untracked(single_color_product):
    from dataclasses import replace

    controller = SelectionController(replace(single_color_product, track_inventory=False))
    assert controller.select(1, 2)


def test_controller_rejects_unknown_axis_or_option(tee_product):
    controller = SelectionController(tee_product)
    assert not controller.select(9, 11)
    assert not controller.select(1, 21)  # option of another axis
    assert len(controller.state) == 0


def test_controller_select_replaces_previous_choice(tee_product):
    controller = SelectionController(tee_product)
    controller.select(1, 11)
    controller.select(1, 13)
    assert controller.state.option_ids == (13,)
    views = controller.option_states(1)
    assert [view.option_id for view in views if view.selected] == [13]


def test_controller_clear_resets_selection_and_gallery(tee_product):
    controller = SelectionController(tee_product)
    controller.select(1, 13)
    controller.show_image(1)
    assert controller.resolve().image_url == "https://cdn.example.com/back.jpg"
    controller.clear()
    assert len(controller.state) == 0
    assert controller.resolve().image_url == "https://cdn.example.com/front.jpg"


def test_option_states_unknown_axis(tee_product):
    assert SelectionController(tee_product).option_states(99) == []
