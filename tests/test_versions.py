import pytest

from syskit.tasks import versions


class TestVersion:
    @pytest.mark.parametrize("text, expected", [
        ("2.30.0", 2030000000),
        ("2.030.001", 2030001000),
        ("1.2.3.4", 1002003004),
        ("10", 10000000000),
        ("1.2", 1002000000),
        ("1.2.3.4.5", 1002003004),
        ("24.0.5-rc1", 24000005000),
        ("v2.1", 1000000),
        ("", 0),
    ])
    def test_normalized_value(self, text, expected):
        assert versions.version(text) == expected

    def test_zero_padding_makes_leading_zeros_irrelevant(self):
        assert versions.version("2.030.000") == versions.version("2.30.0")

    @pytest.mark.parametrize("installed, minimum", [
        ("2.030.001", "2.30.0"),
        ("2.30.0", "2.30.0"),
        ("2.31", "2.30.9"),
        ("3.0.0", "2.999.999"),
    ])
    def test_ordering_passes(self, installed, minimum):
        assert versions.version(installed) >= versions.version(minimum)

    @pytest.mark.parametrize("installed, minimum", [
        ("2.29.9", "2.30.0"),
        ("1.999", "2"),
        ("2.30.0", "2.30.0.1"),
    ])
    def test_ordering_fails(self, installed, minimum):
        assert versions.version(installed) < versions.version(minimum)


@pytest.mark.parametrize("output, expected", [
    ("git version 2.39.2", "2.39.2"),
    ("Docker version 24.0.5, build ced0996", "24.0.5"),
    ("Python 3.11.4", ""),
    ("1.2.3", "1.2.3"),
    ("node v18\nsecond line", ""),
    ("", ""),
])
def test_parse_version_output(output, expected):
    assert versions.parse_version_output(output) == expected


class TestCheckVersion:
    def test_newer_version_passes(self, task, shell, output):
        shell.on("git --version", stdout="git version 2.39.2\n")

        result = versions.check_version(task, "git", "2.30.0")

        assert result.success
        assert result.data == "2.39.2"
        assert output.lines[0].startswith("[+] version check: git (>=2.30.0) installed: 2.39.2")
        assert output.lines[0].endswith("[OK]")

    def test_older_version_exits(self, task, shell, output):
        shell.on("git --version", stdout="git version 2.20.1\n")

        with pytest.raises(SystemExit):
            versions.check_version(task, "git", "2.30.0")

        assert output.lines[0].endswith("[fail]")
        assert "error: version check failed -- exiting" in output.text

    def test_missing_binary_exits(self, task, shell):
        shell.on("nope --version", exit_status=127)

        with pytest.raises(SystemExit):
            versions.check_version(task, "nope", "1.0")

    def test_version_string(self, task, shell):
        shell.on("docker --version", stdout="Docker version 24.0.5, build ced0996\n")

        assert versions.version_string(task, "docker") == "24.0.5"


class TestConfirmVersion:
    def test_confirmed(self, task, shell, answer, output):
        shell.on("docker --version", stdout="Docker version 24.0.5, build ced0996\n")
        answer(True)

        result = versions.confirm_version(task, "docker", "20.10")

        assert result.success
        assert "Verify version: docker" in output.text
        assert "Docker version 24.0.5, build ced0996" in output.text
        assert output.lines[-1].startswith("[+] version check: docker")
        assert output.lines[-1].endswith("[OK]")

    def test_rejected_exits(self, task, shell, answer, output):
        shell.on("docker --version", stdout="Docker version 19.03.1, build 1\n")
        answer(False)

        with pytest.raises(SystemExit):
            versions.confirm_version(task, "docker", "20.10")

        assert "error: version check: docker failed -- exiting" in output.text
