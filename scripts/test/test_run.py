import docopt

from mock import patch
from pytest import raises

from script import Script
from scripts import run

doc = run.__doc__


class TestRun(Script):
    script_name = 'gotest'

    def parse(self, argv):
        return docopt.docopt(doc, run.split_argv(argv))

    def test_no_args(self):
        args = self.parse([])
        assert args["--detail"] is False
        assert args["--ignore"] is None
        assert args["--profile"] is None
        assert args["<go_test_args>"] == []

    def test_detail_spellings(self):
        for flag in ('-d', '--detail', '-detail'):
            assert self.parse([flag])["--detail"] is True

    def test_ignore_forms(self):
        assert self.parse(["-i", "example,pb"])["--ignore"] == "example,pb"
        assert self.parse(["--ignore=cmd,testdata"])["--ignore"] == \
            "cmd,testdata"
        assert self.parse(["-ignore", "gen"])["--ignore"] == "gen"
        assert self.parse(["-i=a"])["--ignore"] == "a"

    def test_repeated_ignore(self):
        args = self.parse(["-i", "a,b", "--ignore", "c", "-i=d"])
        assert args["--ignore"] == "a,b,c,d"

    def test_trailing_ignore_without_value(self):
        args = self.parse(["-v", "-i"])
        assert args["--ignore"] is None
        assert args["<go_test_args>"] == ["-v"]

    def test_passthrough_keeps_order(self):
        args = self.parse(["-i", "pb", "-run", "TestFoo", "-d", "-race"])
        assert args["--detail"] is True
        assert args["--ignore"] == "pb"
        assert args["<go_test_args>"] == ["-run", "TestFoo", "-race"]

    def test_double_dash_forwards_everything(self):
        args = self.parse(["-d", "--", "-d", "-args", "-i"])
        assert args["--detail"] is True
        assert args["<go_test_args>"] == ["-d", "-args", "-i"]

    def test_valued_options(self):
        args = self.parse([
            "--profile", "c.out", "--html=c.html", "--no-open",
            "--debug", "--log-file", "gotest.log",
        ])
        assert args["--profile"] == "c.out"
        assert args["--html"] == "c.html"
        assert args["--no-open"] is True
        assert args["--debug"] is True
        assert args["--log-file"] == "gotest.log"
        assert args["<go_test_args>"] == []

    def test_split_argv(self):
        assert run.split_argv(["-v", "-d", "-i", "x"]) == \
            ["--detail", "--ignore=x", "--", "-v"]
        assert run.split_argv(["-help"]) == ["--help", "--"]

    @patch("gotest.run.main")
    def test_main(self, m_main):
        m_main.return_value = 3
        with raises(SystemExit) as exc:
            run.main(["-d", "-cover"])
        assert exc.value.code == 3
        args = m_main.call_args[0][0]
        assert args["--detail"] is True
        assert args["<go_test_args>"] == ["-cover"]
