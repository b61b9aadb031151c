"""Tests for unitgen.flags module."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from unitgen.flags import (
    CONTAINER_FLAGS,
    POD_FLAGS,
    FlagSpec,
    filter_common_container_flags,
    filter_pod_flags,
    normalize_flags,
    remove_arg,
    remove_detach_arg,
    remove_replace_arg,
    split_payload,
)


class TestFlagSpec:
    """Tests for FlagSpec dataclass."""

    def test_forms(self) -> None:
        """Bare and prefixed forms are derived from the name."""
        flag = FlagSpec("cidfile")
        assert flag.bare == "--cidfile"
        assert flag.prefix == "--cidfile="

    def test_flag_sets(self) -> None:
        """Pod and container flag sets hold the expected names."""
        assert [f.name for f in POD_FLAGS] == ["pod", "pod-id-file", "infra-conmon-pidfile"]
        assert [f.name for f in CONTAINER_FLAGS] == ["conmon-pidfile", "cidfile", "cgroups"]


class TestSplitPayload:
    """Tests for split_payload function."""

    def test_no_payload(self) -> None:
        """arg_count=0 leaves everything in the flag region."""
        assert split_payload(["run", "-d"], 0) == (["run", "-d"], [])

    def test_all_payload(self) -> None:
        """arg_count=len puts everything in the payload."""
        assert split_payload(["echo", "hi"], 2) == ([], ["echo", "hi"])


class TestFilterPodFlags:
    """Tests for filter_pod_flags function."""

    def test_bare_flag_with_value(self) -> None:
        """--pod and its value are removed, payload is kept."""
        command = ["run", "--pod", "mypod", "--rm", "alpine", "echo", "hi"]
        assert filter_pod_flags(command, 2) == ["run", "--rm", "alpine", "echo", "hi"]

    def test_prefixed_flags(self) -> None:
        """--flag=value forms are removed alone."""
        command = [
            "run",
            "--pod=mypod",
            "--pod-id-file=/run/pod.id",
            "--infra-conmon-pidfile=/run/infra.pid",
            "alpine",
        ]
        assert filter_pod_flags(command, 0) == ["run", "alpine"]

    def test_value_looking_like_flag_is_consumed(self) -> None:
        """The element after a bare flag is dropped even if it looks like a flag."""
        command = ["run", "--pod-id-file", "--rm", "alpine"]
        assert filter_pod_flags(command, 0) == ["run", "alpine"]

    def test_container_flags_untouched(self) -> None:
        """Pod filter leaves container-scoped flags alone."""
        command = ["run", "--cidfile=/x", "--cgroups", "split"]
        assert filter_pod_flags(command, 0) == command

    def test_payload_preserved(self) -> None:
        """Flags inside the payload are not removed."""
        command = ["run", "alpine", "sh", "--pod", "p"]
        assert filter_pod_flags(command, 3) == command

    def test_similar_prefix_not_removed(self) -> None:
        """--podman is not --pod."""
        command = ["run", "--podman", "x"]
        assert filter_pod_flags(command, 0) == command


class TestFilterCommonContainerFlags:
    """Tests for filter_common_container_flags function."""

    def test_cidfile_removed_pod_kept(self) -> None:
        """Only container-scoped flags are removed."""
        command = ["run", "--pod=mypod", "--cidfile=/x"]
        assert filter_common_container_flags(command, 0) == ["run", "--pod=mypod"]

    def test_bare_forms(self) -> None:
        """Bare forms drop their value too."""
        command = [
            "run",
            "--conmon-pidfile",
            "/run/c.pid",
            "--cidfile",
            "/run/c.id",
            "--cgroups",
            "no-conmon",
            "-d",
            "nginx",
        ]
        assert filter_common_container_flags(command, 1) == ["run", "-d", "nginx"]

    def test_no_flags_is_noop(self) -> None:
        """A command without target flags is returned unchanged."""
        command = ["run", "--rm", "-d", "alpine", "top"]
        assert filter_common_container_flags(command, 2) == command

    def test_returns_new_list(self) -> None:
        """The input list is not modified."""
        command = ["run", "--cidfile=/x", "alpine"]
        result = filter_common_container_flags(command, 1)
        assert command == ["run", "--cidfile=/x", "alpine"]
        assert result is not command

    def test_trailing_bare_flag_keeps_payload(self) -> None:
        """A bare flag at the end of the flag region never eats the payload."""
        command = ["run", "--cidfile", "alpine", "top"]
        assert filter_common_container_flags(command, 2) == ["run", "alpine", "top"]

    def test_empty_command(self) -> None:
        """Empty command stays empty."""
        assert filter_common_container_flags([], 0) == []


class TestFilterProperties:
    """Properties shared by the filter and normalize stages."""

    COMMANDS = [
        ["run", "--pod", "p", "--cidfile=/x", "--cgroups", "split", "img", "--pod", "x"],
        ["run", "--cidfile", "--pod=p", "img"],
        ["--conmon-pidfile=/a", "--pod-id-file", "f", "img", "--cidfile=/y"],
        ["run", "-d=false", "--replace=false", "img", "--detach=false", "--replace=false"],
        ["run", "--detach=false", "--name", "x", "img", "-d=false"],
        ["run", "img"],
    ]
    STAGES = [filter_pod_flags, filter_common_container_flags, normalize_flags]

    @pytest.mark.parametrize("command", COMMANDS)
    @pytest.mark.parametrize("stage", STAGES)
    def test_payload_identical(
        self, command: list[str], stage: Callable[[list[str], int], list[str]]
    ) -> None:
        """The last arg_count elements survive every stage byte for byte."""
        for arg_count in range(len(command) + 1):
            result = stage(command, arg_count)
            tail = command[len(command) - arg_count :]
            assert result[len(result) - arg_count :] == tail

    @pytest.mark.parametrize("command", COMMANDS)
    @pytest.mark.parametrize("stage", STAGES)
    def test_idempotent(
        self, command: list[str], stage: Callable[[list[str], int], list[str]]
    ) -> None:
        """Applying a stage twice equals applying it once."""
        for arg_count in range(len(command) + 1):
            once = stage(command, arg_count)
            assert stage(once, arg_count) == once


class TestRemoveArg:
    """Tests for remove_arg function."""

    def test_removes_all_exact_matches(self) -> None:
        """Every exact occurrence is removed."""
        assert remove_arg("-d=false", ["-d=false", "run", "-d=false"]) == ["run"]

    def test_no_prefix_matching(self) -> None:
        """Only exact equality counts."""
        args = ["-d=falsey", "--detach=false2"]
        assert remove_arg("-d=false", args) == args


class TestNormalizer:
    """Tests for detach/replace normalization."""

    def test_detach_false_removed_payload_kept(self) -> None:
        """-d=false goes, the payload follows unchanged."""
        assert remove_detach_arg(["run", "-d=false", "--name", "x"], 1) == ["run", "--name", "x"]

    def test_long_detach_false_removed(self) -> None:
        """--detach=false is removed too."""
        assert remove_detach_arg(["run", "--detach=false", "img"], 1) == ["run", "img"]

    def test_detach_true_kept(self) -> None:
        """Other spellings are left alone."""
        args = ["run", "-d", "--detach=true", "img"]
        assert remove_detach_arg(args, 1) == args

    def test_detach_in_payload_kept(self) -> None:
        """The entrypoint may use the same literal."""
        args = ["run", "img", "app", "--detach=false"]
        assert remove_detach_arg(args, 2) == args

    def test_replace_false_removed(self) -> None:
        """--replace=false is removed from the flag region only."""
        args = ["run", "--replace=false", "img", "--replace=false"]
        assert remove_replace_arg(args, 2) == ["run", "img", "--replace=false"]

    def test_normalize_flags(self) -> None:
        """normalize_flags applies detach and replace removal."""
        args = ["run", "-d=false", "--replace=false", "--detach=false", "img", "-d=false"]
        assert normalize_flags(args, 2) == ["run", "img", "-d=false"]
