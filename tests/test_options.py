import unittest
import threading

from rollgrid import LimitOptions, OptionType, get_options, set_options, reset_options, RollGrid2D, InvalidSizeError

class TestOptions(unittest.TestCase):

    def tearDown(self):
        reset_options(OptionType.LIMITS)

    def test_defaults(self):
        opts = get_options(OptionType.LIMITS)
        self.assertEqual(opts.max_capacity, 2**31 - 1)
        self.assertEqual(opts.coord_bits, 32)
        self.assertEqual(opts.coord_min, -2**31)
        self.assertEqual(opts.coord_max, 2**31 - 1)

    def test_invalid(self):
        self.assertRaises(ValueError, LimitOptions, max_capacity=0)
        self.assertRaises(ValueError, LimitOptions, coord_bits=1)

    def test_context(self):
        with LimitOptions(max_capacity=8) as outer:
            self.assertIs(get_options(OptionType.LIMITS), outer)
            with LimitOptions(max_capacity=4) as inner:
                self.assertIs(get_options(OptionType.LIMITS), inner)
                self.assertRaises(InvalidSizeError, RollGrid2D, (3, 2), (0, 0), lambda c: c)
            self.assertIs(get_options(OptionType.LIMITS), outer)
            RollGrid2D((3, 2), (0, 0), lambda c: c)
        self.assertEqual(get_options(OptionType.LIMITS).max_capacity, 2**31 - 1)

    def test_thread_local(self):
        set_options(LimitOptions(coord_bits=16))
        self.assertEqual(get_options(OptionType.LIMITS).coord_max, 2**15 - 1)

        seen = []
        thread = threading.Thread(target=lambda: seen.append(get_options(OptionType.LIMITS).coord_bits))
        thread.start()
        thread.join()
        self.assertEqual(seen, [32])

        reset_options(OptionType.LIMITS)
        self.assertEqual(get_options(OptionType.LIMITS).coord_bits, 32)

if __name__ == '__main__':
    unittest.main()
