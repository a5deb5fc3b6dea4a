import httpx

from weartube.errors import ApiError, TransportError
from weartube.result import Result
from weartube.schemas import CommentPage, CommentThread


class TestResult:
    def test_success_holds_value(self):
        res = Result.success(3)
        assert res.is_success and not res.is_failure
        assert res.get_or_none() == 3

    def test_success_may_hold_none(self):
        res = Result.success(None)
        assert res.is_success
        assert res.get_or_none() is None

    def test_failure_hides_value(self):
        res = Result.failure(ApiError(500, "boom"))
        assert res.is_failure
        assert res.get_or_none() is None

    def test_get_or_default(self):
        page = CommentPage(items=[CommentThread(id="c1")])
        assert Result.success(page).get_or_default(CommentPage()) is page
        assert Result.success(None).get_or_default(CommentPage()) == CommentPage()
        err = TransportError(httpx.ConnectError("offline"))
        assert Result.failure(err).get_or_default(CommentPage()) == CommentPage()

    def test_fold_picks_branch(self):
        ok = Result.success(2).fold(lambda v: v * 10, lambda e: e.message)
        bad = Result.failure(ApiError(404, "gone")).fold(lambda v: v * 10, lambda e: e.message)
        assert ok == 20
        assert bad == "HTTP 404: gone"
