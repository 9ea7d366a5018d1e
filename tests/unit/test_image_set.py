"""Unit tests for the ordered image set."""

import pytest
from app.errors import IndexOutOfRangeError, NoValidFilesError
from app.models.image import ImageCandidate
from app.pipeline.image_set import ImageSetManager


def png(name: str, data: bytes = b"\x89PNG fake") -> ImageCandidate:
    return ImageCandidate(data=data, media_type="image/png", name=name)


def jpeg(name: str) -> ImageCandidate:
    return ImageCandidate(data=b"\xff\xd8", media_type="image/jpeg", name=name)


@pytest.fixture
def manager():
    m = ImageSetManager()
    m.append([png("a.png"), png("b.png"), png("c.png")])
    return m


def names(m: ImageSetManager) -> list[str]:
    return [img.name for img in m.to_ordered_list()]


class TestAppend:
    def test_starts_empty(self):
        m = ImageSetManager()
        assert m.is_empty()
        assert m.size() == 0

    def test_preserves_arrival_order(self, manager):
        manager.append([png("d.png"), png("e.png")])
        assert names(manager) == ["a.png", "b.png", "c.png", "d.png", "e.png"]

    def test_non_png_filtered_out(self, manager):
        added = manager.append([jpeg("x.jpg"), png("d.png")])
        assert [img.name for img in added] == ["d.png"]
        assert names(manager) == ["a.png", "b.png", "c.png", "d.png"]

    def test_all_non_png_raises_and_leaves_state(self, manager):
        with pytest.raises(NoValidFilesError) as exc_info:
            manager.append([jpeg("x.jpg"), jpeg("y.jpg")])
        assert exc_info.value.rejected == ["x.jpg", "y.jpg"]
        assert names(manager) == ["a.png", "b.png", "c.png"]

    def test_empty_input_raises(self, manager):
        with pytest.raises(NoValidFilesError):
            manager.append([])
        assert manager.size() == 3

    def test_media_type_case_and_parameters(self):
        m = ImageSetManager()
        m.append([ImageCandidate(data=b"x", media_type="Image/PNG; q=1", name="a.png")])
        assert m.size() == 1

    def test_size_defaults_to_payload_length(self):
        m = ImageSetManager()
        m.append([png("a.png", b"12345")])
        assert m.to_ordered_list()[0].size == 5
        assert m.total_bytes() == 5


class TestRemoveAt:
    def test_shifts_later_images(self, manager):
        removed = manager.remove_at(1)
        assert removed.name == "b.png"
        assert names(manager) == ["a.png", "c.png"]

    @pytest.mark.parametrize("index", [3, 10, -1])
    def test_out_of_range_leaves_state(self, manager, index):
        with pytest.raises(IndexOutOfRangeError):
            manager.remove_at(index)
        assert names(manager) == ["a.png", "b.png", "c.png"]

    def test_out_of_range_is_index_error(self):
        with pytest.raises(IndexError):
            ImageSetManager().remove_at(0)


class TestAccessors:
    def test_snapshot_is_not_live(self, manager):
        snapshot = manager.to_ordered_list()
        manager.remove_at(0)
        manager.append([png("z.png")])
        assert [img.name for img in snapshot] == ["a.png", "b.png", "c.png"]

    def test_clear(self, manager):
        manager.clear()
        assert manager.is_empty()
        assert len(manager) == 0

    def test_iteration(self, manager):
        assert [img.name for img in manager] == ["a.png", "b.png", "c.png"]
