from eshell.shell_parser import RedirectOperator, normalize, resolve_redirection, tokenize


def test_tokenize_blank_line_has_no_stages():
    assert tokenize("") == []
    assert tokenize("   \t  ") == []


def test_tokenize_splits_on_pipe_and_normalizes():
    assert tokenize("  ls   -la |grep   py  | wc -l ") == ["ls -la", "grep py", "wc -l"]


def test_tokenize_keeps_empty_stages():
    assert tokenize("ls || wc") == ["ls", "", "wc"]


def test_normalize_collapses_whitespace():
    assert normalize("\techo   a \t b  ") == "echo a b"


def test_resolve_redirection_truncate():
    resolved = resolve_redirection("echo hello > /tmp/out")
    assert resolved.found
    assert resolved.command == "echo hello"
    assert resolved.target == "/tmp/out"
    assert resolved.operator is RedirectOperator.TRUNCATE


def test_resolve_redirection_prefers_append_token():
    resolved = resolve_redirection("echo hello >> log.txt")
    assert resolved.operator is RedirectOperator.APPEND
    assert resolved.command == "echo hello"
    assert resolved.target == "log.txt"
    assert resolved.redirection.append


def test_resolve_redirection_without_operator():
    resolved = resolve_redirection("ls -la")
    assert not resolved.found
    assert resolved.command == "ls -la"
    assert resolved.target is None


def test_resolve_redirection_only_stage_has_empty_command():
    resolved = resolve_redirection("> out.txt")
    assert resolved.found
    assert resolved.command == ""
    assert resolved.target == "out.txt"


def test_resolve_redirection_splits_at_first_occurrence():
    resolved = resolve_redirection("echo a > b > c")
    assert resolved.command == "echo a"
    assert resolved.target == "b > c"
