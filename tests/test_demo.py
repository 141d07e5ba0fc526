"""
Tests for the demo command-line script.
"""

import demo


class TestDemo:
    """Tests for demo.py argument handling and output."""

    def test_parse_args(self):
        """Test values before and after --remove are split and converted."""
        inserts, removals = demo.parse_args(["3", "1", "x", "--remove", "1"])

        assert inserts == [3, 1, "x"]
        assert removals == [1]

    def test_parse_args_without_removals(self):
        """Test everything is an insert when --remove is absent."""
        assert demo.parse_args(["5"]) == ([5], [])

    def test_scenario_output(self, capsys):
        """Test the reference scenario prints the expected summary."""
        exit_code = demo.main(["10", "20", "30", "15", "25", "5", "--remove", "20"])
        out = capsys.readouterr().out

        assert exit_code == 0
        assert "in-order: [5, 10, 15, 25, 30]" in out
        assert "min: 5  max: 30" in out
        assert "size: 5" in out
        assert "level-order: 25(B), 10(B), 30(B), 5(R), 15(R)" in out

    def test_empty_tree_output(self, capsys):
        """Test an empty tree reports the empty-container error instead of failing."""
        exit_code = demo.main(["4", "--remove", "4"])
        out = capsys.readouterr().out

        assert exit_code == 0
        assert "in-order: []" in out
        assert "min/max: RedBlackTree is empty" in out
        assert "size: 0" in out

    def test_mixed_types_rejected(self):
        """Test values that cannot be compared exit with an error code."""
        assert demo.main(["1", "a"]) == 2
