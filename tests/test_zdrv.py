import pytest

from spacecadet.zdrv import MAX_DEPTH, IndexedBitmap, ZMap, paint, paint_flat


def test_zmap_stride_padding():
    assert ZMap(8, 2).stride == 8
    padded = ZMap(5, 2)
    assert padded.stride % 4 == 0 and padded.stride >= 5
    assert ZMap(5, 2, 5).stride == 5
    assert ZMap(5, 2, -1).stride == padded.stride


def test_bitmap_stride_too_small():
    with pytest.raises(ValueError):
        IndexedBitmap(4, 4, 3)


def test_fill_region_only():
    z = ZMap(4, 3)
    z.fill(2, 2, 1, 1, 7)
    assert z[1, 1] == 7 and z[2, 2] == 7
    assert z[0, 0] == 0 and z[3, 2] == 0 and z[1, 0] == 0


def test_fill_out_of_range():
    z = ZMap(4, 4)
    with pytest.raises(ValueError):
        z.fill(3, 3, 2, 2, 1)


def test_flip_rows_reverses_and_round_trips():
    z = ZMap(3, 5)
    for y in range(5):
        z.fill(3, 1, 0, y, y)
    z.flip_rows()
    assert [z[0, y] for y in range(5)] == [4, 3, 2, 1, 0]
    z.flip_rows()
    assert [z[2, y] for y in range(5)] == [0, 1, 2, 3, 4]


def test_preview_gray_levels():
    z = ZMap(2, 1)
    z[0, 0] = MAX_DEPTH
    z[1, 0] = MAX_DEPTH - 0xFF * 10
    pixels = z.preview()
    assert pixels[0] == (0, 0, 0, 0xFF)
    assert pixels[1] == (10, 10, 10, 0xFF)


def test_paint_respects_depth():
    dst = IndexedBitmap(2, 1)
    dst_z = ZMap(2, 1)
    dst_z.fill(2, 1, 0, 0, 100)
    src = IndexedBitmap(2, 1)
    src[0, 0] = 5
    src[1, 0] = 6
    src_z = ZMap(2, 1)
    src_z[0, 0] = 50
    src_z[1, 0] = 150
    paint(2, 1, dst, 0, 0, dst_z, 0, 0, src, 0, 0, src_z, 0, 0)
    assert dst[0, 0] == 5 and dst_z[0, 0] == 50
    assert dst[1, 0] == 0 and dst_z[1, 0] == 100


def test_paint_with_offsets():
    dst = IndexedBitmap(3, 3)
    dst_z = ZMap(3, 3)
    dst_z.fill(3, 3, 0, 0, MAX_DEPTH)
    src = IndexedBitmap(1, 1)
    src[0, 0] = 9
    src_z = ZMap(1, 1)
    src_z[0, 0] = 3
    paint(1, 1, dst, 2, 1, dst_z, 2, 1, src, 0, 0, src_z, 0, 0)
    assert dst[2, 1] == 9 and dst_z[2, 1] == 3
    assert sum(dst.data) == 9


def test_paint_flat_transparency_and_depth():
    dst = IndexedBitmap(3, 1)
    z = ZMap(3, 1)
    z[0, 0] = 200
    z[1, 0] = 200
    z[2, 0] = 20
    src = IndexedBitmap(3, 1)
    src[0, 0] = 4
    src[1, 0] = 0
    src[2, 0] = 4
    paint_flat(3, 1, dst, 0, 0, z, 0, 0, src, 0, 0, 50)
    assert [dst[x, 0] for x in range(3)] == [4, 0, 0]
    assert [z[x, 0] for x in range(3)] == [200, 200, 20]


def test_paint_region_outside_raises():
    bmp = IndexedBitmap(2, 2)
    z = ZMap(2, 2)
    with pytest.raises(ValueError):
        paint_flat(2, 2, bmp, 1, 0, z, 0, 0, bmp, 0, 0, 1)