import pytest

from acpl.evaluation import clamp_eval, parse_eval


class TestParseEval:
    def test_positive_pawns(self):
        assert parse_eval("[%eval 1.5]") == pytest.approx(150.0)

    def test_negative_pawns(self):
        assert parse_eval("[%eval -0.3]") == pytest.approx(-30.0)

    def test_integer_pawns(self):
        assert parse_eval("[%eval 2]") == pytest.approx(200.0)

    def test_ignores_trailing_depth(self):
        assert parse_eval("[%eval 0.17,23]") == pytest.approx(17.0)

    def test_marker_inside_longer_comment(self):
        assert parse_eval("Inaccuracy. Nf3 was best. [%eval -0.45] [%clk 0:02:59]") == pytest.approx(-45.0)

    def test_mate_for_white(self):
        assert parse_eval("[%eval #5]") == 1000.0

    def test_mate_against_white(self):
        assert parse_eval("[%eval #-3]") == -1000.0

    def test_mate_distance_is_discarded(self):
        # Mate in 1 and mate in 30 score the same; only the side matters.
        assert parse_eval("[%eval #1]") == parse_eval("[%eval #30]")
        assert parse_eval("[%eval #-1]") == parse_eval("[%eval #-30]")

    def test_missing_marker(self):
        assert parse_eval("[%clk 0:03:00]") is None
        assert parse_eval("") is None

    def test_marker_needs_trailing_space(self):
        assert parse_eval("[%eval:1.0]") is None

    def test_malformed_number(self):
        assert parse_eval("[%eval abc]") is None
        assert parse_eval("[%eval ]") is None


class TestClampEval:
    @pytest.mark.parametrize("cp", [-1e9, -1000.0, -999.5, 0.0, 150.0, 1000.0, 12345.0])
    def test_always_within_bounds(self, cp):
        assert -1000.0 <= clamp_eval(cp) <= 1000.0

    def test_limits(self):
        assert clamp_eval(2500.0) == 1000.0
        assert clamp_eval(-2500.0) == -1000.0
        assert clamp_eval(42.0) == 42.0
