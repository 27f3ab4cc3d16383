import unittest

from rollgrid import FixedStorage, VacantSlotError, OccupiedSlotError

class TestFixedStorage(unittest.TestCase):

    def setUp(self):
        self.storage = FixedStorage.build(6, lambda i: i * 10)

    def test_build(self):
        self.assertEqual(len(self.storage), 6)
        self.assertEqual(self.storage.occupied(), 6)
        self.assertEqual(list(self.storage), [(i, i * 10) for i in range(6)])
        self.assertEqual(len(FixedStorage(0)), 0)
        self.assertRaises(ValueError, FixedStorage, -1)

    def test_failing_build(self):
        calls = []
        def init(index):
            if index == 3:
                raise RuntimeError("broken")
            calls.append(index)
            return index
        self.assertRaises(RuntimeError, FixedStorage.build, 5, init)
        self.assertEqual(calls, [0, 1, 2])

    def test_slots(self):
        storage = self.storage
        self.assertEqual(storage.take(2), 20)
        self.assertFalse(storage.is_occupied(2))
        self.assertIsNone(storage.get(2))
        self.assertRaises(VacantSlotError, storage.take, 2)
        self.assertRaises(VacantSlotError, storage.peek, 2)
        self.assertEqual(list(storage.vacant_indices()), [2])

        storage.put(2, "a")
        self.assertEqual(storage.peek(2), "a")
        self.assertRaises(OccupiedSlotError, storage.put, 2, "b")

        self.assertEqual(storage.replace(2, "b"), "a")
        storage.take(2)
        self.assertIsNone(storage.replace(2, "c"))
        self.assertEqual(storage.get(2), "c")

        for index in [-1, 6]:
            self.assertRaises(IndexError, storage.get, index)
            self.assertRaises(IndexError, storage.put, index, 0)
            self.assertRaises(IndexError, storage.is_occupied, index)

    def test_replace_with(self):
        self.storage.replace_with(1, lambda v: v + 1)
        self.assertEqual(self.storage.get(1), 11)

        def broken(value):
            raise KeyError(value)
        self.assertRaises(KeyError, self.storage.replace_with, 1, broken)
        self.assertEqual(self.storage.get(1), 11)
        self.assertTrue(self.storage.is_occupied(1))

        self.storage.take(0)
        self.assertRaises(VacantSlotError, self.storage.replace_with, 0, lambda v: v)

    def test_reallocate(self):
        block = self.storage.reallocate(3)
        self.assertEqual(len(block), 3)
        self.assertEqual(block.occupied(), 0)
        block.put(0, self.storage.take(4))
        self.assertEqual(self.storage.release(), 5)
        self.assertEqual(self.storage.occupied(), 0)
        self.assertEqual(len(self.storage), 6)
        self.assertEqual(list(block), [(0, 40)])

if __name__ == '__main__':
    unittest.main()
