"""Pipe splitting tests."""
from pipeforge.splitter import split_on_pipes


class TestSplitOnPipes:
    def test_no_pipe(self):
        assert split_on_pipes(["ls", "-la"]) == [["ls", "-la"]]

    def test_single_pipe(self):
        assert split_on_pipes(["cat", "f", "|", "wc"]) == [["cat", "f"], ["wc"]]

    def test_multiple_pipes(self):
        groups = split_on_pipes(["a", "|", "b", "|", "c", "-x"])
        assert groups == [["a"], ["b"], ["c", "-x"]]

    def test_quoted_pipe_is_not_separator(self):
        assert split_on_pipes(["echo", '"|"', "'|'"]) == [["echo", '"|"', "'|'"]]

    def test_pipe_inside_token_is_not_separator(self):
        assert split_on_pipes(["a|b"]) == [["a|b"]]

    def test_trailing_pipe_dropped(self):
        assert split_on_pipes(["ls", "|"]) == [["ls"]]

    def test_leading_pipe_keeps_empty_group(self):
        assert split_on_pipes(["|", "ls"]) == [[], ["ls"]]

    def test_double_pipe_keeps_empty_group(self):
        assert split_on_pipes(["a", "|", "|", "b"]) == [["a"], [], ["b"]]

    def test_empty_input(self):
        assert split_on_pipes([]) == []

    def test_order_preserved(self):
        groups = split_on_pipes(["z", "|", "y", "|", "x"])
        assert [g[0] for g in groups] == ["z", "y", "x"]
