"""Tests for ticket prefix resolution and formatting."""
from unittest.mock import Mock

import pytest
from git import Repo
from rich.console import Console

from commitgenius.errors import GitError
from commitgenius.git import GitRepository
from commitgenius.models import Prefix, PrefixFormat, PrefixSource
from commitgenius.prefix import PrefixResolver, format_message, is_valid_prefix, prefix_from_branch


def resolver_for(branch=None, auto_detect=True, error=None):
    git = Mock(spec=GitRepository)
    git.current_branch.return_value = branch
    if error:
        git.current_branch.side_effect = error
    return PrefixResolver(git, auto_detect=auto_detect, console=Mock(spec=Console))


@pytest.mark.parametrize("branch, expected", [
    ("feature/JR-1234-add-auth", "JR-1234"),
    ("bugfix/proj-42_fix-null", "PROJ-42"),
    ("JR-99-quick-fix", "JR-99"),
    ("abc-7", "ABC-7"),
    ("feature/abc123-login", "ABC123"),
    ("abc123-login", "ABC123"),
    ("ABC123", "ABC123"),
    ("main", None),
    ("feature/add-auth", None),
    ("develop", None),
])
def test_prefix_from_branch(branch, expected):
    assert prefix_from_branch(branch) == expected


@pytest.mark.parametrize("value, valid", [
    ("JR-1234", True),
    ("proj-1", True),
    ("#42", True),
    ("JR1234", False),
    ("hello world", False),
    ("#abc", False),
])
def test_is_valid_prefix(value, valid):
    assert is_valid_prefix(value) is valid


def test_override_wins_over_branch():
    resolver = resolver_for("feature/JR-1234-add-auth")

    prefix = resolver.resolve("OPS-7")

    assert prefix == Prefix(value="OPS-7", source=PrefixSource.CLI, valid=True)
    resolver.git.current_branch.assert_not_called()


def test_invalid_override_warns_but_is_used():
    resolver = resolver_for()

    prefix = resolver.resolve("not a ticket")

    assert prefix.value == "not a ticket"
    assert prefix.valid is False
    resolver.console.print.assert_called_once()


def test_blank_override_falls_through_to_branch():
    prefix = resolver_for("JR-5-x").resolve("   ")
    assert prefix.value == "JR-5"
    assert prefix.source == PrefixSource.BRANCH


def test_auto_detect_disabled():
    resolver = resolver_for("feature/JR-1234-add-auth", auto_detect=False)
    assert resolver.resolve() is None
    resolver.git.current_branch.assert_not_called()


def test_detached_head_means_no_prefix():
    assert resolver_for(None).resolve() is None


def test_git_error_means_no_prefix():
    assert resolver_for(error=GitError("boom")).resolve() is None


def test_unmatched_branch_means_no_prefix():
    assert resolver_for("main").resolve() is None


def test_format_brackets():
    prefix = Prefix(value="JR-1234", source=PrefixSource.BRANCH)
    assert format_message("feat: add auth", prefix, PrefixFormat.BRACKETS) == "[JR-1234] feat: add auth"


def test_format_colon():
    prefix = Prefix(value="#42", source=PrefixSource.CLI)
    assert format_message("fix: typo", prefix, PrefixFormat.COLON) == "#42: fix: typo"


@pytest.mark.parametrize("style", list(PrefixFormat))
def test_format_without_prefix_is_identity(style):
    assert format_message("feat: add auth", None, style) == "feat: add auth"


def test_format_does_not_double_prefix():
    prefix = Prefix(value="JR-1", source=PrefixSource.BRANCH)
    assert format_message("[JR-1] feat: x", prefix) == "[JR-1] feat: x"


def test_branch_detection_in_real_repo(temp_git_repo):
    Repo(temp_git_repo).git.checkout("-b", "feature/JR-1234-add-auth")
    git = GitRepository(temp_git_repo)

    prefix = PrefixResolver(git, console=Mock(spec=Console)).resolve()

    assert prefix.value == "JR-1234"
    assert format_message("feat(auth): add login", prefix).startswith("[JR-1234] ")
