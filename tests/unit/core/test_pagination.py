from __future__ import annotations

import pytest

from modules.core.exceptions import InvalidPageRequest
from modules.core.pagination import paginate

pytestmark = pytest.mark.unit


class TestPaginate:
    def test_slices_sequences(self):
        page = paginate(list(range(7)), page=3, page_size=3)
        assert page.items == [6]
        assert page.total_items == 7
        assert page.total_pages == 3

    def test_page_past_end_is_empty(self):
        assert paginate([1, 2], page=4, page_size=2).items == []

    @pytest.mark.parametrize("page,page_size", [(0, 1), (1, 0)])
    def test_rejects_non_positive(self, page, page_size):
        with pytest.raises(InvalidPageRequest, match="greater than 0"):
            paginate([1], page=page, page_size=page_size)
