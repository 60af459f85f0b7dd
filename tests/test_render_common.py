import pytest

from dgengine.render_common import (
    INVALID_RENDER_RESOURCE_ID,
    IndexDataType,
    RenderFeature,
    RenderMode,
    RenderResource,
    index_data_type_size,
)


@pytest.mark.parametrize(
    "data_type, size",
    [
        (IndexDataType.UNSIGNED_8, 1),
        (IndexDataType.UNSIGNED_16, 2),
        (IndexDataType.UNSIGNED_32, 4),
    ],
)
def test_index_data_type_size(data_type, size):
    assert index_data_type_size(data_type) == size


def test_index_sizes_increase_with_type():
    sizes = [index_data_type_size(t) for t in IndexDataType]
    assert sizes == sorted(sizes)
    assert len(set(sizes)) == len(sizes)


def test_invalid_index_type_raises():
    with pytest.raises(ValueError):
        index_data_type_size(7)


def test_enum_orders_match_source():
    assert [index_data_type_size(t) for t in IndexDataType] == [1, 2, 4]
    assert [m.name for m in RenderMode] == ["POINTS", "LINES", "TRIANGLES"]
    assert [m.name for m in RenderFeature] == ["SCISSOR", "DEPTH_TEST"]


def test_resources_get_unique_increasing_ids():
    resources = [RenderResource() for _ in range(5)]
    ids = [r.id() for r in resources]
    assert ids == sorted(ids)
    assert len(set(ids)) == 5
    assert all(i != INVALID_RENDER_RESOURCE_ID for i in ids)
    assert ids[-1] - ids[0] == 4


def test_resource_id_is_stable():
    resource = RenderResource()
    assert resource.id() == resource.id()
    assert RenderResource().id() > resource.id()