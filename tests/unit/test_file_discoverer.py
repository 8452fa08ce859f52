"""Tests for text file discovery."""

from wordstats.infrastructure.discovery import FileDiscoverer


class TestFileDiscoverer:
    """Extension filtering, recursion and missing directories."""

    def test_recursive_listing(self, sample_tree):
        files = FileDiscoverer().list_text_files(sample_tree, recursive=True)

        relative = [path.relative_to(sample_tree).as_posix() for path in files]
        assert relative == ["a.txt", "b.md", "sub/c.py", "sub/deep/d.csv"]

    def test_top_level_only(self, sample_tree):
        files = FileDiscoverer().list_text_files(sample_tree, recursive=False)

        assert [path.name for path in files] == ["a.txt", "b.md"]

    def test_extension_match_is_case_insensitive(self, temp_dir):
        (temp_dir / "NOTES.TXT").write_text("x", encoding="utf-8")
        (temp_dir / "Readme.Md").write_text("x", encoding="utf-8")

        names = FileDiscoverer().text_file_names(temp_dir)

        assert sorted(names) == ["NOTES.TXT", "Readme.Md"]

    def test_custom_extensions(self, sample_tree):
        discoverer = FileDiscoverer(extensions=[".py"])

        assert discoverer.text_file_names(sample_tree) == ["c.py"]

    def test_excluded_directories_are_skipped(self, temp_dir):
        (temp_dir / ".git").mkdir()
        (temp_dir / ".git" / "HEAD.txt").write_text("x", encoding="utf-8")
        (temp_dir / "keep.txt").write_text("x", encoding="utf-8")

        assert FileDiscoverer().text_file_names(temp_dir) == ["keep.txt"]

    def test_directories_with_text_extension_are_skipped(self, temp_dir):
        (temp_dir / "folder.txt").mkdir()

        assert FileDiscoverer().list_text_files(temp_dir) == []

    def test_missing_directory_gives_empty_list(self, temp_dir):
        assert FileDiscoverer().list_text_files(temp_dir / "nope") == []

    def test_file_path_gives_empty_list(self, sample_tree):
        assert FileDiscoverer().list_text_files(sample_tree / "a.txt") == []

    def test_blank_directory_gives_empty_list(self):
        discoverer = FileDiscoverer()

        assert discoverer.list_text_files("") == []
        assert discoverer.list_text_files("   ") == []
        assert discoverer.list_text_files(None) == []

    def test_count_text_files(self, sample_tree):
        discoverer = FileDiscoverer()

        assert discoverer.count_text_files(sample_tree) == 4
        assert discoverer.count_text_files(sample_tree, recursive=False) == 2
