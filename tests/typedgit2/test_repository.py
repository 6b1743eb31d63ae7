from pathlib import Path

import pytest

from typedgit2.apply import ApplyLocation, ApplyOptions, ApplyOptionsFlags
from typedgit2.attr import AttributeFlags, AttributeLocation, AttributeValueKind
from typedgit2.blob import Blob
from typedgit2.branch import BranchType, branch_is_head, branch_name
from typedgit2.capabilities import (
    ALL_CAPABILITIES,
    CAPABILITIES,
    ExtendedAttributes,
    UpstreamMerge,
)
from typedgit2.commit import Commit
from typedgit2.diff import Diff
from typedgit2.exc import AlreadyExistsError, NotFoundError, UnbornBranchError
from typedgit2.oid import Oid
from typedgit2.repository import (
    Identity,
    Repository,
    RepositoryInitFlags,
    RepositoryItem,
    RepositoryOpenFlags,
    RepositoryState,
)
from typedgit2.status import FileStatus, StatusOptions

from .conftest import git

PATCH = """\
diff --git a/a_file b/a_file
--- a/a_file
+++ b/a_file
@@ -1 +1 @@
-A file.
+Changed.
"""

REMOTE_URL = "https://example.com/repo.git"


def collect(results: list):
    """A callback appending its arguments to results."""

    def callback(*args):
        results.append(args)

    return callback


class TestOpening:
    def test_open(self, repo: Repository, repo_root: Path) -> None:
        assert repo.path == f"{repo_root / '.git'}/"
        assert repo.workdir == f"{repo_root}/"
        assert repo.commondir == repo.path
        assert repr(repo) == f"Repository(path={repo.path!r})"

    def test_open_missing(self, libgit2, tmp_path: Path) -> None:
        with pytest.raises(NotFoundError):
            Repository.open(tmp_path / "nowhere")

    def test_open_ext_searches(self, libgit2, repo_root: Path) -> None:
        subdir = repo_root / "sub" / "dir"
        subdir.mkdir(parents=True)

        with Repository.open_ext(subdir) as repo:
            assert repo.workdir == f"{repo_root}/"

    def test_open_ext_no_search(self, libgit2, repo_root: Path) -> None:
        subdir = repo_root / "subdir"
        subdir.mkdir()

        with pytest.raises(NotFoundError):
            Repository.open_ext(subdir, flags=RepositoryOpenFlags.NO_SEARCH)

    def test_init_repository(self, libgit2, tmp_path: Path) -> None:
        path = tmp_path / "deep" / "new_repo"

        repo = Repository.init_repository(
            path,
            initial_head="trunk",
            description="A test repository",
            origin_url=REMOTE_URL,
        )
        try:
            # Older libgit2 only counts a repository as empty if HEAD names the default branch.
            assert repo.is_head_unborn
            with pytest.raises(UnbornBranchError):
                repo.head()
            with repo.config() as config:
                assert config["remote.origin.url"] == REMOTE_URL
        finally:
            repo.deinit()

        assert git(path, "symbolic-ref", "HEAD") == "refs/heads/trunk"
        assert (path / ".git" / "description").read_text().startswith("A test repository")

    def test_init_empty(self, libgit2, tmp_path: Path) -> None:
        with Repository.init_repository(tmp_path / "empty") as repo:
            assert repo.is_empty
            assert repo.is_head_unborn

    def test_init_bare(self, libgit2, tmp_path: Path) -> None:
        flags = RepositoryInitFlags.MKPATH | RepositoryInitFlags.BARE
        with Repository.init_repository(tmp_path / "bare.git", flags=flags) as repo:
            assert repo.is_bare
            assert repo.workdir is None


class TestState:
    def test_kind(self, repo: Repository) -> None:
        assert not repo.is_bare
        assert not repo.is_empty
        assert not repo.is_shallow
        assert not repo.is_worktree

    def test_state_merge(self, repo: Repository, repo_root: Path, head_sha: str) -> None:
        assert repo.state is RepositoryState.NONE

        (repo_root / ".git" / "MERGE_HEAD").write_text(f"{head_sha}\n")
        assert repo.state is RepositoryState.MERGE

        repo.state_cleanup()
        assert repo.state is RepositoryState.NONE
        assert not (repo_root / ".git" / "MERGE_HEAD").exists()

    def test_identity(self, repo: Repository) -> None:
        assert repo.identity == Identity()

        identity = Identity(name="Someone", email="someone@example.com")
        repo.set_identity(identity)
        assert repo.identity == identity

        repo.set_identity(Identity())
        assert repo.identity == Identity()

    def test_namespace(self, repo: Repository) -> None:
        assert repo.namespace is None
        repo.set_namespace("foo")
        assert repo.namespace == "foo"
        repo.set_namespace(None)
        assert repo.namespace is None

    def test_item_path(self, repo: Repository) -> None:
        assert repo.item_path(RepositoryItem.GITDIR) == repo.path
        assert repo.item_path(RepositoryItem.WORKDIR) == repo.workdir
        assert repo.item_path(RepositoryItem.INDEX) == f"{repo.path}index"

    def test_prepared_message(self, repo: Repository, repo_root: Path) -> None:
        with pytest.raises(NotFoundError):
            repo.prepared_message()

        (repo_root / ".git" / "MERGE_MSG").write_text("Merge it\n")
        assert repo.prepared_message() == "Merge it\n"

        repo.remove_prepared_message()
        assert not (repo_root / ".git" / "MERGE_MSG").exists()


class TestHead:
    def test_head(self, repo: Repository, head_sha: str) -> None:
        assert not repo.is_head_detached
        assert not repo.is_head_unborn

        with repo.head() as head:
            assert head.name == "refs/heads/main"
            assert head.shorthand == "main"
            assert head.target == head_sha

    def test_detach(self, repo: Repository, head_sha: str) -> None:
        repo.detach_head()
        assert repo.is_head_detached

        repo.set_head("refs/heads/main")
        assert not repo.is_head_detached

        repo.set_head_detached(head_sha)
        assert repo.is_head_detached

    def test_detach_from_annotated(self, repo: Repository, head_sha: str) -> None:
        with repo.annotated_commit_lookup(head_sha) as commit:
            repo.set_head_detached_from_annotated(commit)
        assert repo.is_head_detached


class TestFetchHead:
    @pytest.fixture
    def fetch_head(self, repo_root: Path, head_sha: str) -> Path:
        fetch_head = repo_root / ".git" / "FETCH_HEAD"
        fetch_head.write_text(
            f"{head_sha}\t\tbranch 'main' of {REMOTE_URL}\n"
            + f"{head_sha}\tnot-for-merge\tbranch 'other' of {REMOTE_URL}\n"
        )
        return fetch_head

    def test_foreach(self, repo: Repository, fetch_head: Path, head_sha: str) -> None:
        results = []

        assert repo.fetchhead_foreach(collect(results)) == 0

        oid = Oid.from_hex(head_sha)
        assert results == [
            ("refs/heads/main", REMOTE_URL, oid, True),
            ("refs/heads/other", REMOTE_URL, oid, False),
        ]

    def test_foreach_with_user_data(self, repo: Repository, fetch_head: Path) -> None:
        seen = []

        def callback(ref_name, remote_url, oid, is_merge, seen):
            seen.append(ref_name)

        assert repo.fetchhead_foreach_with_user_data(seen, callback) == 0
        assert seen == ["refs/heads/main", "refs/heads/other"]

    def test_foreach_stops(self, repo: Repository, fetch_head: Path) -> None:
        results = []

        def callback(*args):
            results.append(args)
            return 42

        assert repo.fetchhead_foreach(callback) == 42
        assert len(results) == 1

    def test_foreach_exception(self, repo: Repository, fetch_head: Path) -> None:
        def callback(*args):
            raise LookupError("BOO")

        with pytest.raises(LookupError, match="BOO"):
            repo.fetchhead_foreach(callback)

    def test_missing(self, repo: Repository) -> None:
        with pytest.raises(NotFoundError):
            repo.fetchhead_foreach(collect([]))

    def test_annotated_commit(self, repo: Repository, head_sha: str) -> None:
        with repo.annotated_commit_from_fetchhead("main", REMOTE_URL, head_sha) as commit:
            assert commit.id == head_sha
            assert commit.ref == "main"


class TestMergeHead:
    def test_foreach(self, repo: Repository, repo_root: Path, head_sha: str) -> None:
        (repo_root / ".git" / "MERGE_HEAD").write_text(f"{head_sha}\n")
        results = []

        assert repo.mergehead_foreach(collect(results)) == 0
        assert results == [(Oid.from_hex(head_sha),)]

    def test_foreach_with_user_data(
        self, repo: Repository, repo_root: Path, head_sha: str
    ) -> None:
        (repo_root / ".git" / "MERGE_HEAD").write_text(f"{head_sha}\n{head_sha}\n")
        counter = {"count": 0}

        def callback(oid, counter):
            counter["count"] += 1

        assert repo.mergehead_foreach_with_user_data(counter, callback) == 0
        assert counter["count"] == 2


class TestStatus:
    @pytest.fixture
    def changes(self, repo_root: Path) -> Path:
        (repo_root / "a_file").write_text("Changed.\n")
        (repo_root / "new_file").write_text("New.\n")
        (repo_root / ".gitignore").write_text("*.log\n")
        (repo_root / "debug.log").write_text("Noise.\n")
        return repo_root

    def test_status_file(self, repo: Repository, changes: Path) -> None:
        assert repo.status_file("a_file") == FileStatus(wt_modified=True)
        assert repo.status_file("new_file") == FileStatus(wt_new=True)
        assert repo.status_file("debug.log") == FileStatus(ignored=True)

    def test_status_file_current(self, repo: Repository) -> None:
        assert repo.status_file("a_file").is_current

    def test_status_foreach(self, repo: Repository, changes: Path) -> None:
        results = []

        assert repo.status_foreach(collect(results)) == 0

        assert dict(results) == {
            ".gitignore": FileStatus(wt_new=True),
            "a_file": FileStatus(wt_modified=True),
            "new_file": FileStatus(wt_new=True),
            "debug.log": FileStatus(ignored=True),
        }

    def test_status_foreach_with_user_data(self, repo: Repository, changes: Path) -> None:
        paths = set()

        repo.status_foreach_with_user_data(paths, lambda path, status, paths: paths.add(path))

        assert paths == {".gitignore", "a_file", "debug.log", "new_file"}

    def test_status_foreach_ext(self, repo: Repository, changes: Path) -> None:
        results = []

        repo.status_foreach_ext(StatusOptions(pathspec=["new_file"]), collect(results))

        assert results == [("new_file", FileStatus(wt_new=True))]

    def test_status(self, repo: Repository, changes: Path) -> None:
        status = repo.status()

        assert status["a_file"] == FileStatus(wt_modified=True)
        assert status["new_file"] == FileStatus(wt_new=True)
        assert status["debug.log"] == FileStatus(ignored=True)

    def test_status_list(self, repo: Repository, changes: Path) -> None:
        with repo.status_list(StatusOptions(pathspec=["a_file"])) as status_list:
            assert len(status_list) == 1
            (entry,) = status_list
            assert entry.path == "a_file"
            assert entry.status.wt_modified
            assert entry.head_to_index is None
            assert status_list[-1] == entry

            with pytest.raises(IndexError):
                status_list[1]

    def test_should_ignore(self, repo: Repository, changes: Path) -> None:
        assert repo.status_should_ignore("other.log")
        assert not repo.status_should_ignore("other.txt")

    def test_hash_file(self, repo: Repository, repo_root: Path) -> None:
        expected = git(repo_root, "hash-object", "a_file")
        assert repo.hash_file("a_file") == expected


class TestAttributes:
    @pytest.fixture
    def gitattributes(self, repo_root: Path) -> Path:
        gitattributes = repo_root / ".gitattributes"
        gitattributes.write_text("*.txt text diff=python\n*.bin -text\n*.dat mybinary\n")
        return gitattributes

    def test_attribute(self, repo: Repository, gitattributes: Path) -> None:
        set_attr = repo.attribute("doc.txt", "text")
        assert set_attr.kind is AttributeValueKind.TRUE
        assert set_attr.value is True

        unset_attr = repo.attribute("data.bin", "text")
        assert unset_attr.kind is AttributeValueKind.FALSE
        assert unset_attr.value is False

        value_attr = repo.attribute("doc.txt", "diff")
        assert value_attr.kind is AttributeValueKind.STRING
        assert value_attr.value == "python"

        unspecified = repo.attribute("doc.txt", "eol")
        assert not unspecified.is_specified
        assert unspecified.value is None

    def test_attribute_index_only(self, repo: Repository, gitattributes: Path) -> None:
        # .gitattributes isn’t staged yet.
        flags = AttributeFlags(location=AttributeLocation.INDEX_ONLY)
        assert not repo.attribute("doc.txt", "text", flags).is_specified

    def test_attribute_many(self, repo: Repository, gitattributes: Path) -> None:
        values = repo.attribute_many("doc.txt", ["diff", "eol", "text"])
        assert [value.value for value in values] == ["python", None, True]

        assert repo.attribute_many("doc.txt", []) == []

    def test_attribute_foreach(self, repo: Repository, gitattributes: Path) -> None:
        results = []

        assert repo.attribute_foreach("doc.txt", collect(results)) == 0

        assert {name: attribute.value for name, attribute in results} == {
            "text": True,
            "diff": "python",
        }

    def test_attribute_foreach_with_user_data(self, repo: Repository, gitattributes: Path) -> None:
        found = {}

        def callback(name, attribute, found):
            found[name] = attribute.value
            return 1

        assert repo.attribute_foreach_with_user_data("doc.txt", found, callback) == 1
        assert len(found) == 1

    def test_macro(self, repo: Repository, gitattributes: Path) -> None:
        # Flushing drops macros as well, they must be defined before parsing.
        repo.attribute_cache_flush()
        repo.attribute_add_macro("mybinary", "-diff -text")

        assert repo.attribute("some.dat", "diff").value is False
        assert repo.attribute("some.dat", "mybinary").value is True

    @pytest.mark.skipif(
        not Repository.supports(ExtendedAttributes), reason="needs libgit2 1.2 or later"
    )
    def test_attribute_ext(self, repo: Repository, gitattributes: Path) -> None:
        assert repo.attribute_ext("doc.txt", "diff").value == "python"
        assert [value.value for value in repo.attribute_many_ext("doc.txt", ["text"])] == [True]

        results = []
        repo.attribute_foreach_ext("doc.txt", collect(results))
        assert {name for name, _ in results} == {"text", "diff"}


class TestBlame:
    def test_blame_file(self, repo: Repository, head_sha: str) -> None:
        with repo.blame_file("a_file") as blame:
            assert len(blame) == 1
            (hunk,) = blame.hunks
            assert hunk.final_commit_id == head_sha
            assert hunk.final_start_line_number == 1
            assert hunk.lines_in_hunk == 1
            assert hunk.final_signature.name == "The Man in the Moon"
            assert hunk.orig_path == "a_file"

            assert blame.hunk_for_line(1) == hunk
            assert blame.hunk_for_line(2) is None

    def test_blame_missing(self, repo: Repository) -> None:
        with pytest.raises(NotFoundError):
            repo.blame_file("no_such_file")


class TestBlobs:
    def test_from_buffer(self, repo: Repository) -> None:
        oid = repo.blob_from_buffer(b"Some data\n")

        with repo.blob_lookup(oid) as blob:
            assert isinstance(blob, Blob)
            assert blob.id == oid
            assert blob.size == 10
            assert blob.data == b"Some data\n"
            assert not blob.is_binary

        with repo.blob_lookup_prefix(oid.hex[:8]) as blob:
            assert blob.id == oid

    def test_from_stream(self, repo: Repository) -> None:
        oid = repo.blob_from_stream([b"Some ", b"data", b"\n"])
        assert oid == repo.blob_from_buffer(b"Some data\n")

    def test_from_stream_fails(self, repo: Repository) -> None:
        def chunks():
            yield b"Some "
            raise RuntimeError("BOO")

        with pytest.raises(RuntimeError):
            repo.blob_from_stream(chunks())

    def test_from_workdir_and_disk(self, repo: Repository, repo_root: Path) -> None:
        expected = git(repo_root, "hash-object", "a_file")

        assert repo.blob_from_workdir("a_file") == expected
        assert repo.blob_from_disk(repo_root / "a_file") == expected

    def test_lookup_prefix_too_short(self, repo: Repository) -> None:
        with pytest.raises(ValueError):
            repo.blob_lookup_prefix("ab")


class TestBranches:
    def test_create_and_lookup(self, repo: Repository, head_sha: str) -> None:
        with repo.commit_lookup(head_sha) as commit:
            with repo.branch_create("feature", commit) as ref:
                assert ref.name == "refs/heads/feature"
                assert branch_name(ref) == "feature"
                assert not branch_is_head(ref)

            with pytest.raises(AlreadyExistsError):
                repo.branch_create("feature", commit)

            repo.branch_create("feature", commit, force=True).deinit()

        with repo.branch_lookup("main") as ref:
            assert branch_is_head(ref)

        with pytest.raises(NotFoundError):
            repo.branch_lookup("main", BranchType.REMOTE)

    def test_create_from_annotated(self, repo: Repository) -> None:
        with repo.annotated_commit_from_revspec("HEAD") as commit:
            with repo.branch_create_from_annotated("other", commit) as ref:
                assert ref.target == commit.id

    def test_iterate(self, repo: Repository, repo_root: Path) -> None:
        git(repo_root, "branch", "feature")
        git(repo_root, "update-ref", "refs/remotes/origin/main", "HEAD")

        found = {}
        with repo.iterate_branches() as iterator:
            for ref, branch_type in iterator:
                with ref:
                    found[ref.shorthand] = branch_type

        assert found == {
            "main": BranchType.LOCAL,
            "feature": BranchType.LOCAL,
            "origin/main": BranchType.REMOTE,
        }

        with repo.iterate_branches(BranchType.REMOTE) as iterator:
            names = []
            for ref, _ in iterator:
                names.append(ref.name)
                ref.deinit()
        assert names == ["refs/remotes/origin/main"]

    def test_upstream(self, repo: Repository, repo_root: Path) -> None:
        git(repo_root, "remote", "add", "origin", REMOTE_URL)
        git(repo_root, "update-ref", "refs/remotes/origin/main", "HEAD")
        git(repo_root, "branch", "--set-upstream-to", "origin/main", "main")

        assert repo.branch_upstream_name("refs/heads/main") == "refs/remotes/origin/main"
        assert repo.branch_upstream_remote("refs/heads/main") == "origin"
        assert repo.branch_remote_name("refs/remotes/origin/main") == "origin"

        if Repository.supports(UpstreamMerge):
            assert repo.branch_upstream_merge("refs/heads/main") == "refs/heads/main"

    def test_no_upstream(self, repo: Repository) -> None:
        with pytest.raises(NotFoundError):
            repo.branch_upstream_name("refs/heads/main")


class TestConfig:
    def test_read_write(self, repo: Repository, repo_root: Path) -> None:
        with repo.config() as config:
            assert config["core.bare"] == "false"
            assert "core.bare" in config
            assert "no.such-key" not in config
            assert config.get("no.such-key") is None
            assert config.get("no.such-key", "default") == "default"
            with pytest.raises(NotFoundError):
                config["no.such-key"]

            config["test.number"] = 5
            config["test.flag"] = True
            config["test.path"] = Path("/some/where")
            config["test.text"] = "Hello"

            assert config["test.number"] == "5"
            assert config["test.flag"] == "true"
            assert config["test.path"] == "/some/where"

            del config["test.text"]
            assert "test.text" not in config

        assert git(repo_root, "config", "test.number") == "5"

    def test_level(self, repo: Repository) -> None:
        from typedgit2._wrappers.native_adaptation import git_config_level_t

        with repo.config() as config:
            assert config.level_of("core.bare") is git_config_level_t.LOCAL

    def test_snapshot(self, repo: Repository, repo_root: Path) -> None:
        with repo.config_snapshot() as snapshot:
            git(repo_root, "config", "test.later", "value")
            assert "test.later" not in snapshot


class TestIndex:
    def test_add_all(self, repo: Repository, repo_root: Path) -> None:
        (repo_root / "new_file").write_text("New.\n")
        results = []

        with repo.index() as index:
            assert len(index) == 1
            index.add_all(callback=collect(results))
            assert len(index) == 2
            index.write()

        assert [path for path, _ in results] == ["new_file"]
        assert repo.status_file("new_file") == FileStatus(index_new=True)

    def test_add_all_skip(self, repo: Repository, repo_root: Path) -> None:
        (repo_root / "new_file").write_text("New.\n")
        (repo_root / "other_file").write_text("Other.\n")

        def callback(path, matched_pathspec, skip):
            return 1 if path in skip else 0

        with repo.index() as index:
            index.add_all(["*_file"], callback, user_data={"other_file"})
            index.write()

        assert repo.status_file("new_file") == FileStatus(index_new=True)
        assert repo.status_file("other_file") == FileStatus(wt_new=True)

    def test_add_remove_write_tree(self, repo: Repository, repo_root: Path) -> None:
        (repo_root / "new_file").write_text("New.\n")

        with repo.index() as index:
            index.add("new_file")
            tree_id = index.write_tree()
            index.remove("a_file")
            assert len(index) == 1

        with repo[tree_id] as tree:
            assert "new_file" in tree
            assert "a_file" in tree


class TestApply:
    def test_apply_workdir(self, repo: Repository, repo_root: Path) -> None:
        deltas = []
        hunks = []

        with Diff.from_buffer(PATCH) as diff:
            repo.apply_diff(
                diff,
                options=ApplyOptions(
                    delta_callback=lambda delta: deltas.append(delta),
                    hunk_callback=lambda hunk: hunks.append(hunk),
                ),
            )

        assert (repo_root / "a_file").read_text() == "Changed.\n"
        assert [delta.new_file.path for delta in deltas] == ["a_file"]
        assert [(hunk.old_start, hunk.new_start) for hunk in hunks] == [(1, 1)]

    def test_apply_check_only(self, repo: Repository, repo_root: Path) -> None:
        options = ApplyOptions(flags=ApplyOptionsFlags(check=True))

        with Diff.from_buffer(PATCH) as diff:
            repo.apply_diff(diff, ApplyLocation.BOTH, options)

        assert (repo_root / "a_file").read_text() == "A file.\n"

    def test_apply_index(self, repo: Repository, repo_root: Path) -> None:
        with Diff.from_buffer(PATCH) as diff:
            repo.apply_diff(diff, ApplyLocation.INDEX)

        assert repo.status_file("a_file") == FileStatus(index_modified=True, wt_modified=True)

    def test_apply_skip_delta(self, repo: Repository, repo_root: Path) -> None:
        with Diff.from_buffer(PATCH) as diff:
            repo.apply_diff(
                diff, options=ApplyOptions(delta_callback=lambda delta, data: 1, user_data=None)
            )

        assert (repo_root / "a_file").read_text() == "A file.\n"

    def test_apply_to_tree(self, repo: Repository, head_sha: str) -> None:
        with (
            repo.commit_lookup(head_sha) as commit,
            commit.tree() as tree,
            Diff.from_buffer(PATCH) as diff,
            repo.apply_diff_to_tree(tree, diff) as index,
        ):
            assert len(index) == 1


class TestObjects:
    def test_reference_names(self, repo: Repository, repo_root: Path) -> None:
        git(repo_root, "tag", "v1.0")
        assert sorted(repo.reference_names()) == ["refs/heads/main", "refs/tags/v1.0"]

    def test_revparse(self, repo: Repository, head_sha: str) -> None:
        with repo.revparse_single("HEAD") as commit:
            assert isinstance(commit, Commit)
            assert commit.id == head_sha
            assert commit.message == "Add a file\n"

    def test_getitem(self, repo: Repository, head_sha: str) -> None:
        with repo[head_sha] as obj:
            assert isinstance(obj, Commit)

        with pytest.raises(NotFoundError):
            repo[Oid.zero()]

    def test_describe_workdir(self, repo: Repository, repo_root: Path) -> None:
        git(repo_root, "tag", "-a", "-m", "Version 1.0", "v1.0")
        with repo.describe_workdir() as result:
            assert result.format() == "v1.0"


class TestCapabilities:
    def test_supports(self) -> None:
        for capability in ALL_CAPABILITIES:
            assert Repository.supports(capability) is (capability in CAPABILITIES)
            assert issubclass(Repository, capability) is (capability in CAPABILITIES)

    def test_unsupported_operations_missing(self) -> None:
        for capability in ALL_CAPABILITIES:
            if capability in CAPABILITIES:
                continue
            for name in vars(capability):
                if not name.startswith("_") and name != "min_version":
                    assert not hasattr(Repository, name)

