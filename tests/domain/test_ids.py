"""Tests for post IDs and upload names."""

from concurrent.futures import ThreadPoolExecutor

from folio.domain.ids import POST_ID_PATTERN, UploadNamer, new_post_id, safe_extension


class TestPostIds:
    def test_matches_uuid_pattern(self) -> None:
        assert POST_ID_PATTERN.match(new_post_id())

    def test_unique(self) -> None:
        assert len({new_post_id() for _ in range(100)}) == 100


class TestSafeExtension:
    def test_keeps_simple_extension(self) -> None:
        assert safe_extension("photo.jpg") == ".jpg"

    def test_preserves_case(self) -> None:
        assert safe_extension("IMG_001.PNG") == ".PNG"

    def test_last_suffix_only(self) -> None:
        assert safe_extension("backup.tar.gz") == ".gz"

    def test_no_extension(self) -> None:
        assert safe_extension("README") == ""

    def test_strips_posix_directories(self) -> None:
        assert safe_extension("../../etc/passwd") == ""

    def test_strips_windows_directories(self) -> None:
        assert safe_extension("C:\\Users\\me\\pic.webp") == ".webp"

    def test_rejects_odd_characters(self) -> None:
        assert safe_extension("shell.p$p") == ""
        assert safe_extension("name.") == ""


class TestUploadNamer:
    def test_strictly_increasing(self) -> None:
        namer = UploadNamer()
        stems = [int(namer.next_stem()) for _ in range(1000)]
        assert stems == sorted(stems)
        assert len(set(stems)) == len(stems)

    def test_name_appends_extension(self) -> None:
        name = UploadNamer().name_for("cat.gif")
        assert name.endswith(".gif")
        assert name[:-4].isdigit()

    def test_unique_across_threads(self) -> None:
        namer = UploadNamer()
        with ThreadPoolExecutor(max_workers=8) as pool:
            names = list(pool.map(lambda _: namer.name_for("same.png"), range(400)))
        assert len(set(names)) == 400
