import pytest

from roster.errors import ValidationError
from roster.state import FilterStateHolder


def holder_on_page(page: int, page_count: int = 5) -> FilterStateHolder:
    holder = FilterStateHolder(page_size=10, facets=("department",))
    holder.update_page_count(page_count)
    assert holder.set_page(page)
    return holder


@pytest.mark.parametrize(
    "change",
    [
        lambda h: h.set_search_term("john"),
        lambda h: h.set_status_filter("active"),
        lambda h: h.set_facet("department", "hr"),
        lambda h: h.set_page_size(20),
        lambda h: h.set_sort("last_name"),
    ],
)
def test_filter_changes_reset_to_first_page(change):
    holder = holder_on_page(3)

    change(holder)

    assert holder.page == 1


def test_set_page_ignores_out_of_range_requests():
    holder = holder_on_page(2, page_count=3)

    assert holder.set_page(0) is False
    assert holder.set_page(4) is False
    assert holder.page == 2
    assert holder.next_page() is True
    assert holder.next_page() is False
    assert holder.page == 3
    assert holder.previous_page() is True
    assert holder.page == 2


def test_shrinking_page_count_reclamps_cursor():
    holder = holder_on_page(5)

    holder.update_page_count(2)

    assert holder.page == 2
    holder.update_page_count(0)
    assert holder.page == 1


def test_rejects_unsupported_page_sizes():
    holder = FilterStateHolder()

    with pytest.raises(ValidationError) as excinfo:
        holder.set_page_size(25)

    assert excinfo.value.field == "page_size"
    with pytest.raises(ValidationError):
        FilterStateHolder(page_size=7)


def test_changed_fires_only_on_real_changes():
    holder = FilterStateHolder(facets=("department",))
    seen = []
    holder.changed.connect(seen.append)

    holder.set_status_filter("active")
    holder.set_status_filter("active")
    holder.set_facet("department", None)

    assert len(seen) == 1
    assert seen[0].status_filter == "active"
    assert seen[0].facets == {"department": "all"}


def test_state_is_a_copy_and_reset_clears_filters():
    holder = FilterStateHolder(facets=("department",))
    holder.set_search_term("jo")
    holder.set_facet("department", "sales")

    snapshot = holder.state
    snapshot.facets["department"] = "hr"
    assert holder.state.facet("department") == "sales"

    holder.reset()
    state = holder.state
    assert state.search_term == ""
    assert state.status_filter == "all"
    assert state.facet("department") == "all"
