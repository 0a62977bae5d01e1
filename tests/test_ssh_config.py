"""Tests for ssh config Host block handling."""

from provisioner.ssh_config import HostBlock, configured_hosts, ensure_host_blocks, read_config


def make_blocks(alias="foo"):
    key = f"/nfs/ws/shared_ssh/id_ed25519_github_{alias}"
    known = "/nfs/ws/shared_ssh/known_hosts"
    return [
        HostBlock("github.com", "github.com", key, known),
        HostBlock(f"github.com-{alias}", "github.com", key, known),
    ]


class TestHostBlock:
    def test_render(self):
        block = HostBlock(
            "github.com-ci",
            "github.com",
            "/nfs/ws/shared_ssh/id_ed25519_github_ci",
            "/nfs/ws/shared_ssh/known_hosts",
        )

        assert block.render() == (
            "\n"
            "Host github.com-ci\n"
            "    HostName github.com\n"
            "    User git\n"
            "    IdentityFile /nfs/ws/shared_ssh/id_ed25519_github_ci\n"
            "    IdentitiesOnly yes\n"
            "    UserKnownHostsFile /nfs/ws/shared_ssh/known_hosts\n"
            "    GlobalKnownHostsFile /nfs/ws/shared_ssh/known_hosts\n"
        )


class TestConfiguredHosts:
    def test_empty_text(self):
        assert configured_hosts("") == set()

    def test_parses_patterns(self):
        text = "Host github.com\n    User git\n\nHost bitbucket.org-ci\n    User git\n"
        hosts = configured_hosts(text)
        assert "github.com" in hosts
        assert "bitbucket.org-ci" in hosts

    def test_alias_does_not_count_as_base(self):
        hosts = configured_hosts("Host github.com-foo\n    HostName github.com\n")
        assert "github.com" not in hosts

    def test_base_does_not_count_as_alias(self):
        hosts = configured_hosts("Host github.com\n    HostName github.com\n")
        assert "github.com-foo" not in hosts

    def test_multiple_patterns_on_one_line(self):
        hosts = configured_hosts("Host github.com gh\n    User git\n")
        assert {"github.com", "gh"} <= hosts

    def test_indentation_and_case_of_keyword(self):
        hosts = configured_hosts("  host   github.com\n")
        assert "github.com" in hosts


class TestEnsureHostBlocks:
    def test_new_file_gets_base_then_alias(self, tmp_path):
        path = tmp_path / "config"

        added = ensure_host_blocks(path, make_blocks())

        assert added == ["github.com", "github.com-foo"]
        text = path.read_text()
        assert text.count("\nHost ") == 2
        assert text.index("Host github.com\n") < text.index("Host github.com-foo\n")

    def test_second_run_adds_nothing(self, tmp_path):
        path = tmp_path / "config"
        ensure_host_blocks(path, make_blocks())
        before = path.read_text()

        assert ensure_host_blocks(path, make_blocks()) == []
        assert path.read_text() == before

    def test_existing_base_keeps_base_adds_alias(self, tmp_path):
        path = tmp_path / "config"
        path.write_text("Host github.com\n    User git\n")

        added = ensure_host_blocks(path, make_blocks())

        assert added == ["github.com-foo"]
        assert path.read_text().count("Host github.com\n") == 1

    def test_existing_alias_only_adds_base(self, tmp_path):
        path = tmp_path / "config"
        path.write_text("Host github.com-foo\n    User git\n")

        assert ensure_host_blocks(path, make_blocks()) == ["github.com"]

    def test_second_alias_appends_only_alias(self, tmp_path):
        path = tmp_path / "config"
        ensure_host_blocks(path, make_blocks("foo"))

        added = ensure_host_blocks(path, make_blocks("bar"))

        assert added == ["github.com-bar"]

    def test_existing_content_preserved(self, tmp_path):
        path = tmp_path / "config"
        path.write_text("Host example\n    User me\n")

        ensure_host_blocks(path, make_blocks())

        assert path.read_text().startswith("Host example\n    User me\n")

    def test_read_config_missing_file(self, tmp_path):
        assert read_config(tmp_path / "config") == ""


class TestMatchBlocks:
    """Configs mixing Match and Host stanzas."""

    def test_match_block_is_ignored(self):
        text = "Match host github.com\n    User git\n\nHost gitlab.com\n    User git\n"
        hosts = configured_hosts(text)
        assert "gitlab.com" in hosts
        assert "github.com" not in hosts

    def test_blocks_appended_after_match(self, tmp_path):
        path = tmp_path / "config"
        path.write_text("Match host github.com\n    User git\n")

        added = ensure_host_blocks(path, make_blocks())

        assert added == ["github.com", "github.com-foo"]
