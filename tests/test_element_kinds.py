from __future__ import annotations

import importlib.util
import unittest


JAX_AVAILABLE = importlib.util.find_spec("jax") is not None


@unittest.skipUnless(JAX_AVAILABLE, "jax is required for element-kind tests")
class ElementKindTests(unittest.TestCase):
    def test_counterpart_families(self) -> None:
        from numeric_jax import ElementKind

        self.assertEqual(ElementKind.COMPLEX128.real_of, ElementKind.FLOAT64)
        self.assertEqual(ElementKind.COMPLEX64.real_of, ElementKind.FLOAT32)
        self.assertEqual(ElementKind.FLOAT32.complex_of, ElementKind.COMPLEX64)
        self.assertEqual(ElementKind.FLOAT64.single_of, ElementKind.FLOAT32)
        self.assertEqual(ElementKind.COMPLEX64.double_of, ElementKind.COMPLEX128)
        self.assertEqual(ElementKind.FLOAT64.real_of, ElementKind.FLOAT64)
        self.assertEqual(ElementKind.COMPLEX128.complex_of, ElementKind.COMPLEX128)

    def test_counterpart_invariants_hold_for_every_kind(self) -> None:
        from numeric_jax import ElementKind

        for kind in ElementKind:
            with self.subTest(kind=kind.value):
                self.assertEqual(kind.complex_of.real_of, kind.real_of)
                self.assertEqual(kind.double_of.single_of, kind.single_of)
                self.assertEqual(kind.single_of.double_of, kind.double_of)
                self.assertEqual(kind.real_of.is_complex, False)
                self.assertEqual(kind.complex_of.is_complex, True)

    def test_dtype_lookup_is_checked(self) -> None:
        import jax.numpy as jnp

        from numeric_jax import ElementKind, UnsupportedOperationError

        self.assertEqual(ElementKind.from_dtype(jnp.float32), ElementKind.FLOAT32)
        self.assertEqual(ElementKind.from_dtype("complex128"), ElementKind.COMPLEX128)
        self.assertEqual(ElementKind.from_name("double"), ElementKind.FLOAT64)
        with self.assertRaises(UnsupportedOperationError):
            ElementKind.from_dtype(jnp.int32)
        with self.assertRaises(UnsupportedOperationError):
            ElementKind.from_name("quad")

    def test_join_kinds_promotes_to_complex_and_double(self) -> None:
        from numeric_jax import ElementKind
        from numeric_jax.kinds import join_kinds

        self.assertEqual(join_kinds(ElementKind.FLOAT32, ElementKind.FLOAT32), ElementKind.FLOAT32)
        self.assertEqual(join_kinds(ElementKind.FLOAT32, ElementKind.FLOAT64), ElementKind.FLOAT64)
        self.assertEqual(join_kinds(ElementKind.FLOAT32, ElementKind.COMPLEX64), ElementKind.COMPLEX64)
        self.assertEqual(join_kinds(ElementKind.COMPLEX64, ElementKind.FLOAT64), ElementKind.COMPLEX128)

    def test_x64_mode_is_enabled_on_import(self) -> None:
        import numeric_jax  # noqa: F401
        from numeric_jax.config import USE_X64, x64_enabled

        if USE_X64:
            self.assertTrue(x64_enabled())


if __name__ == "__main__":
    unittest.main()
