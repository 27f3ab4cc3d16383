import unittest
from itertools import product

from rollgrid import CoordinateSpace, InvalidBoundsError, InvalidSizeError, OutOfBoundsError, LimitOptions

from utils import backends

class TestCoordinateSpace(unittest.TestCase):

    def setUp(self):
        self.spaces = [CoordinateSpace((4, 4), (0, 0)),
                       CoordinateSpace((4, 4), (1, 2), (1, 2)),
                       CoordinateSpace((3, 5), (-7, 11), (2, 0)),
                       CoordinateSpace((2, 3, 4), (0, 0, 0)),
                       CoordinateSpace((2, 3, 4), (-1, 5, -9), (1, 2, 3)),
                       CoordinateSpace((5,), (3,), (4,))]

    def test_construction(self):
        space = CoordinateSpace((4, 3), (1, -2))
        self.assertEqual(space.capacity, 12)
        self.assertEqual(space.strides, (1, 4))
        self.assertEqual(space.wrap, (0, 0))
        self.assertEqual(space.wrap_index, 0)
        self.assertEqual(space.bounds.min, (1, -2))
        self.assertEqual(space.bounds.max, (5, 1))

        space = CoordinateSpace((2, 3, 4), (0, 0, 0), (1, 2, 3))
        self.assertEqual(space.strides, (1, 8, 2))
        self.assertEqual(space.wrap_index, 1 + 16 + 6)

    def test_invalid(self):
        self.assertRaises(InvalidSizeError, CoordinateSpace, (), ())
        self.assertRaises(InvalidSizeError, CoordinateSpace, (0, 1), (0, 0))
        self.assertRaises(InvalidBoundsError, CoordinateSpace, (1, 1), (0,))
        self.assertRaises(InvalidBoundsError, CoordinateSpace, (2, 2), (0, 0), (2, 0))
        self.assertRaises(InvalidBoundsError, CoordinateSpace, (2, 2), (0, 0), (0, -1))
        self.assertRaises(InvalidBoundsError, CoordinateSpace, (4,), (-2**31 - 1,))
        self.assertRaises(InvalidBoundsError, CoordinateSpace, (4,), (2**31 - 4,))
        CoordinateSpace((4,), (2**31 - 5,))
        CoordinateSpace((4,), (-2**31,))

        with LimitOptions(max_capacity=10, coord_bits=8):
            self.assertRaises(InvalidSizeError, CoordinateSpace, (4, 3), (0, 0))
            self.assertRaises(InvalidBoundsError, CoordinateSpace, (2, 2), (126, 0))
            CoordinateSpace((2, 5), (-128, 122))
        CoordinateSpace((4, 3), (0, 0))

    def test_mapping(self):
        for space in self.spaces:
            seen = set()
            for coord in space.bounds:
                self.assertTrue(space.contains(coord))
                idx = space.to_index(coord)
                self.assertTrue(0 <= idx < space.capacity)
                self.assertEqual(space.to_coord(idx), coord)
                seen.add(idx)
            self.assertEqual(len(seen), space.capacity)
            self.assertEqual(space.to_index(space.offset), space.wrap_index)

    def test_outside(self):
        space = CoordinateSpace((4, 4), (1, 2), (1, 2))
        for coord in [(0, 2), (5, 2), (1, 1), (1, 6), (1,), (1, 2, 3)]:
            self.assertFalse(space.contains(coord))
            self.assertRaises(OutOfBoundsError, space.to_index, coord)
        self.assertRaises(IndexError, space.to_coord, 16)
        self.assertRaises(IndexError, space.to_coord, -1)

    def test_relative_offset(self):
        space = CoordinateSpace((4, 4), (1, 2), (1, 2))
        self.assertEqual(space.relative_offset((1, 2)), (0, 0))
        self.assertEqual(space.relative_offset((4, 5)), (3, 3))
        self.assertEqual(space.relative_offset((5, 2)), (0, 0))
        self.assertEqual(space.relative_offset((0, 1)), (3, 3))

    def test_repositioned(self):
        space = CoordinateSpace((4, 4), (0, 0))
        for x, y in product(range(-5, 6), range(-5, 6)):
            moved = space.repositioned((x, y))
            self.assertEqual(moved.offset, (x, y))
            self.assertEqual(moved.wrap, (x % 4, y % 4))
            # a coordinate kept by the move keeps its slot
            for coord in space.bounds:
                if moved.contains(coord):
                    self.assertEqual(moved.to_index(coord), space.to_index(coord))
            fixed = space.repositioned((x, y), roll=False)
            self.assertEqual(fixed.wrap, space.wrap)

        resized = space.repositioned((1, 1)).resized((2, 3), (5, 5))
        self.assertEqual(resized.wrap, (0, 0))
        self.assertEqual(resized.size, (2, 3))

    def test_to_indices(self):
        for xp, space in product(backends, self.spaces):
            coords = list(space.bounds)
            expected = [space.to_index(c) for c in coords]
            tensor = xp.asarray([[c[axis] for c in coords] for axis in range(space.ndims)])
            idxs = space.to_indices(tensor)
            self.assertEqual(idxs.shape, (len(coords),))
            self.assertEqual([int(i) for i in idxs], expected)

            back = space.to_coords(idxs)
            self.assertEqual(back.shape, (space.ndims, len(coords)))
            self.assertTrue(bool(xp.all(back == tensor)))

    def test_to_indices_outside(self):
        for xp in backends:
            space = CoordinateSpace((4, 4), (1, 2), (1, 2))
            tensor = xp.asarray([[[1, 0], [4, 5]],
                                 [[2, 2], [5, 2]]])
            idxs = space.to_indices(tensor)
            self.assertEqual(idxs.shape, (2, 2))
            self.assertEqual(int(idxs[0, 0]), space.to_index((1, 2)))
            self.assertEqual(int(idxs[0, 1]), -1)
            self.assertEqual(int(idxs[1, 0]), space.to_index((4, 5)))
            self.assertEqual(int(idxs[1, 1]), -1)

    def test_invalid_tensors(self):
        for xp in backends:
            space = CoordinateSpace((4, 4), (0, 0))
            self.assertRaises(ValueError, space.to_indices, xp.asarray([[0.5], [1.0]]))
            self.assertRaises(ValueError, space.to_indices, xp.asarray([[0], [1], [2]]))
            self.assertRaises(ValueError, space.to_coords, xp.asarray([0, 16]))
            self.assertRaises(ValueError, space.to_coords, xp.asarray([-1]))
            self.assertRaises(ValueError, space.to_coords, xp.asarray([1.0]))

if __name__ == '__main__':
    unittest.main()
