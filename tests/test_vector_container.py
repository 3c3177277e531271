from __future__ import annotations

import importlib.util
import math
import unittest


JAX_AVAILABLE = importlib.util.find_spec("jax") is not None


@unittest.skipUnless(JAX_AVAILABLE, "jax is required for vector container tests")
class VectorConstructionTests(unittest.TestCase):
    def test_scalar_konst_and_build(self) -> None:
        from numeric_jax import ElementKind, build, konst, scalar

        self.assertEqual(scalar(3.5).tolist(), [3.5])
        self.assertEqual(konst(2, 4).tolist(), [2.0, 2.0, 2.0, 2.0])
        self.assertEqual(konst(1, 0).tolist(), [])
        self.assertEqual(build(4, lambda k: k * k).tolist(), [0.0, 1.0, 4.0, 9.0])

        single = konst(1, 3, ElementKind.FLOAT32)
        self.assertEqual(single.kind, ElementKind.FLOAT32)
        self.assertEqual(str(single.data.dtype), "float32")

    def test_negative_size_is_rejected(self) -> None:
        from numeric_jax import InvalidSizeError, assoc, build, konst

        with self.assertRaises(InvalidSizeError):
            konst(1, -1)
        with self.assertRaises(InvalidSizeError):
            build(-2, lambda k: k)
        with self.assertRaises(InvalidSizeError):
            assoc(-1, 0, [])

    def test_assoc_later_duplicates_win(self) -> None:
        from numeric_jax import assoc

        v = assoc(5, 0, [(1, 7), (3, 2), (1, 9)])
        self.assertEqual(v.tolist(), [0.0, 9.0, 0.0, 2.0, 0.0])

    def test_assoc_rejects_indices_outside_range(self) -> None:
        from numeric_jax import IndexOutOfRangeError, assoc

        with self.assertRaises(IndexOutOfRangeError):
            assoc(3, 0, [(3, 1)])
        with self.assertRaises(IndexOutOfRangeError):
            assoc(3, 0, [(-1, 1)])

    def test_complex_values_need_a_complex_kind(self) -> None:
        from numeric_jax import ElementKind, UnsupportedOperationError, Vector

        with self.assertRaises(UnsupportedOperationError):
            Vector.from_list([1 + 2j])
        v = Vector.from_list([1 + 2j, 3], ElementKind.COMPLEX128)
        self.assertEqual(v.tolist(), [1 + 2j, 3 + 0j])


@unittest.skipUnless(JAX_AVAILABLE, "jax is required for vector container tests")
class VectorIndexingTests(unittest.TestCase):
    def test_at_index_bounds(self) -> None:
        from numeric_jax import IndexOutOfRangeError, Vector, at_index

        v = Vector.from_list([10, 20, 30])
        self.assertEqual(at_index(v, 2), 30.0)
        self.assertEqual(v[0], 10.0)
        with self.assertRaises(IndexOutOfRangeError):
            at_index(v, 3)
        with self.assertRaises(IndexOutOfRangeError):
            at_index(v, -1)

    def test_find_returns_ascending_indices(self) -> None:
        from numeric_jax import Vector, find

        v = Vector.from_list([0, 2, 3, 1, 5])
        self.assertEqual(find(lambda x: x > 1, v), [1, 2, 4])
        self.assertEqual(find(lambda x: x > 10, v), [])

    def test_cmap_infers_result_kind(self) -> None:
        from numeric_jax import ElementKind, Vector, cmap

        v = Vector.from_list([1, 2], ElementKind.FLOAT32)
        w = cmap(lambda x: x * 1j, v)
        self.assertEqual(w.kind, ElementKind.COMPLEX64)
        self.assertEqual(w.tolist(), [1j, 2j])

        c = Vector.from_list([3 + 4j], ElementKind.COMPLEX128)
        mags = cmap(abs, c)
        self.assertEqual(mags.kind, ElementKind.FLOAT64)
        self.assertEqual(mags.tolist(), [5.0])

        explicit = cmap(lambda x: x + 1, v, ElementKind.FLOAT64)
        self.assertEqual(explicit.kind, ElementKind.FLOAT64)

    def test_index_value_consistency_for_every_kind(self) -> None:
        from numeric_jax import ElementKind, Vector, at_index, max_element, max_index, min_element, min_index

        samples = {
            ElementKind.FLOAT32: [3, -1, 7, 2],
            ElementKind.FLOAT64: [0.5, 9, -4, 9],
            ElementKind.COMPLEX64: [3 + 4j, 1, 2j],
            ElementKind.COMPLEX128: [1j, -6, 2 + 2j],
        }
        for kind, values in samples.items():
            with self.subTest(kind=kind.value):
                v = Vector.from_list(values, kind)
                self.assertEqual(at_index(v, max_index(v)), max_element(v))
                self.assertEqual(at_index(v, min_index(v)), min_element(v))

    def test_extremal_ties_pick_first_occurrence(self) -> None:
        from numeric_jax import Vector, max_index, min_index

        v = Vector.from_list([2, 9, 1, 9, 1])
        self.assertEqual(max_index(v), 1)
        self.assertEqual(min_index(v), 2)

    def test_complex_extremes_use_magnitude(self) -> None:
        from numeric_jax import ElementKind, Vector, max_element, max_index, min_element, min_index

        v = Vector.from_list([3 + 4j, 1, 2j], ElementKind.COMPLEX128)
        self.assertEqual(max_index(v), 0)
        self.assertEqual(min_index(v), 1)
        self.assertEqual(max_element(v), 3 + 4j)
        self.assertEqual(min_element(v), 1 + 0j)

    def test_extremes_of_empty_vector_fail(self) -> None:
        from numeric_jax import InvalidSizeError, Vector, max_element, min_index

        empty = Vector.from_list([])
        with self.assertRaises(InvalidSizeError):
            min_index(empty)
        with self.assertRaises(InvalidSizeError):
            max_element(empty)


@unittest.skipUnless(JAX_AVAILABLE, "jax is required for vector container tests")
class VectorArithmeticTests(unittest.TestCase):
    def test_elementwise_identities_for_every_kind(self) -> None:
        from numeric_jax import ElementKind, Vector, add, konst, mul

        samples = {
            ElementKind.FLOAT32: [1.5, -2, 0],
            ElementKind.FLOAT64: [3, 0.25, -8],
            ElementKind.COMPLEX64: [1 + 1j, -2j, 4],
            ElementKind.COMPLEX128: [0.5 - 1j, 7, 2j],
        }
        for kind, values in samples.items():
            with self.subTest(kind=kind.value):
                v = Vector.from_list(values, kind)
                self.assertEqual(add(v, konst(0, len(v), kind)), v)
                self.assertEqual(mul(v, konst(1, len(v), kind)), v)

    def test_scalar_maps(self) -> None:
        from numeric_jax import ElementKind, Vector, add_constant, scale, scale_recip

        v = Vector.from_list([1, 2, 4])
        self.assertEqual(scale(3, v).tolist(), [3.0, 6.0, 12.0])
        self.assertEqual(add_constant(-1, v).tolist(), [0.0, 1.0, 3.0])
        self.assertEqual(scale_recip(4, v).tolist(), [4.0, 2.0, 1.0])

        c = Vector.from_list([5, 1j], ElementKind.COMPLEX128)
        got = scale_recip(2, c).tolist()
        self.assertAlmostEqual(got[0], 0.4 + 0j)
        self.assertAlmostEqual(got[1], -2j)

    def test_zips(self) -> None:
        from numeric_jax import Vector, add, divide, mul, power, sub

        v = Vector.from_list([1, 2, 3])
        w = Vector.from_list([4, 5, 6])
        self.assertEqual(add(v, w).tolist(), [5.0, 7.0, 9.0])
        self.assertEqual(sub(w, v).tolist(), [3.0, 3.0, 3.0])
        self.assertEqual(mul(v, w).tolist(), [4.0, 10.0, 18.0])
        self.assertEqual(divide(w, Vector.from_list([2, 5, 3])).tolist(), [2.0, 1.0, 2.0])
        self.assertEqual(power(v, Vector.from_list([2, 2, 2])).tolist(), [1.0, 4.0, 9.0])

    def test_mismatched_lengths_fail(self) -> None:
        from numeric_jax import ShapeMismatchError, add, konst

        with self.assertRaises(ShapeMismatchError):
            add(konst(1, 3), konst(1, 4))

    def test_mismatched_kinds_fail_without_promotion(self) -> None:
        from numeric_jax import ElementKind, UnsupportedOperationError, add, konst

        with self.assertRaises(UnsupportedOperationError):
            add(konst(1, 2, ElementKind.FLOAT32), konst(1, 2, ElementKind.FLOAT64))

    def test_step_is_real_only(self) -> None:
        from numeric_jax import ElementKind, UnsupportedOperationError, Vector, konst, step

        self.assertEqual(step(Vector.from_list([-1, 0, 2])).tolist(), [0.0, 0.0, 1.0])
        with self.assertRaises(UnsupportedOperationError):
            step(konst(1j, 3, ElementKind.COMPLEX128))
        with self.assertRaises(UnsupportedOperationError):
            step(konst(1, 3, ElementKind.COMPLEX64))

    def test_arctan2(self) -> None:
        from numeric_jax import ElementKind, UnsupportedOperationError, Vector, arctan2, konst

        got = arctan2(Vector.from_list([1, 1]), Vector.from_list([1, -1])).tolist()
        self.assertAlmostEqual(got[0], math.pi / 4)
        self.assertAlmostEqual(got[1], 3 * math.pi / 4)
        with self.assertRaises(UnsupportedOperationError):
            arctan2(konst(1, 2, ElementKind.COMPLEX128), konst(1, 2, ElementKind.COMPLEX128))

    def test_conj_abs_signum(self) -> None:
        from numeric_jax import ElementKind, Vector, abs_, conj, signum

        real = Vector.from_list([-2, 0, 3])
        self.assertEqual(conj(real), real)
        self.assertEqual(abs_(real).tolist(), [2.0, 0.0, 3.0])
        self.assertEqual(signum(real).tolist(), [-1.0, 0.0, 1.0])

        c = Vector.from_list([3 + 4j, 0], ElementKind.COMPLEX128)
        self.assertEqual(conj(c).tolist(), [3 - 4j, 0j])
        self.assertEqual(abs_(c).tolist(), [5 + 0j, 0j])
        sig = signum(c).tolist()
        self.assertAlmostEqual(sig[0], 0.6 + 0.8j)
        self.assertEqual(sig[1], 0j)

    def test_reductions(self) -> None:
        from numeric_jax import ElementKind, Vector, prod_elements, sum_elements

        v = Vector.from_list([1, 2, 3, 4], ElementKind.FLOAT32)
        self.assertEqual(sum_elements(v), 10.0)
        self.assertEqual(prod_elements(v), 24.0)
        self.assertEqual(sum_elements(Vector.from_list([])), 0.0)
        self.assertEqual(prod_elements(Vector.from_list([])), 1.0)

    def test_elementwise_functions(self) -> None:
        from numeric_jax import UnsupportedOperationError, Vector, vmap_float

        v = Vector.from_list([0, 1])
        self.assertEqual(vmap_float("exp", v).tolist()[0], 1.0)
        self.assertAlmostEqual(vmap_float("exp", v).tolist()[1], math.e)
        self.assertEqual(vmap_float("sqrt", Vector.from_list([4, 9])).tolist(), [2.0, 3.0])
        with self.assertRaises(UnsupportedOperationError):
            vmap_float("gamma", v)


@unittest.skipUnless(JAX_AVAILABLE, "jax is required for vector container tests")
class VectorEqualityTests(unittest.TestCase):
    def test_equality_is_exact(self) -> None:
        from numeric_jax import Vector, equal

        v = Vector.from_list([1.0, 2.0])
        self.assertTrue(equal(v, Vector.from_list([1.0, 2.0])))
        self.assertFalse(equal(v, Vector.from_list([1.0, 2.0 + 1e-12])))
        self.assertFalse(equal(v, Vector.from_list([1.0, 2.0, 3.0])))
        self.assertTrue(equal(Vector.from_list([]), Vector.from_list([])))

    def test_complex_equality_uses_magnitude(self) -> None:
        from numeric_jax import ElementKind, Vector

        a = Vector.from_list([1 + 1j], ElementKind.COMPLEX64)
        self.assertEqual(a, Vector.from_list([1 + 1j], ElementKind.COMPLEX64))
        self.assertNotEqual(a, Vector.from_list([1 - 1j], ElementKind.COMPLEX64))

    def test_vectors_are_not_hashable(self) -> None:
        from numeric_jax import Vector

        with self.assertRaises(TypeError):
            hash(Vector.from_list([1]))


if __name__ == "__main__":
    unittest.main()
