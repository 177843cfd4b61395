import unittest

import numpy as np

import mathgl
from mathgl import DimensionError, Matrix, TypeMismatchError


def _read_back(m):
    return [[m.get(i, j) for j in range(m.cols())] for i in range(m.rows())]


class TestConstructors(unittest.TestCase):
    def test_from_rows_layout(self):
        m = Matrix.from_rows("int32", [[1, 2, 3], [4, 5, 6]])
        self.assertEqual(m.shape, (2, 3))
        self.assertEqual(m.dtype, "int32")
        self.assertEqual(m.get(0, 2), 3)
        self.assertEqual(m.get(1, 0), 4)
        self.assertEqual(m._data.tolist(), [1, 2, 3, 4, 5, 6])

    def test_from_columns_transposes_into_row_major(self):
        # Columns (1, 4) (2, 5) (3, 6) describe rows [1 2 3] and [4 5 6].
        m = Matrix.from_columns("int32", [[1, 4], [2, 5], [3, 6]])
        self.assertEqual(m.shape, (2, 3))
        self.assertEqual(m._data.tolist(), [1, 2, 3, 4, 5, 6])
        self.assertEqual(m.get(1, 2), 6)

    def test_rows_and_columns_build_identical_matrices(self):
        rows = [[1.5, -2.0], [0.25, 4.0], [8.0, 9.5]]
        columns = [list(col) for col in zip(*rows)]
        by_rows = Matrix.from_rows("float64", rows)
        by_cols = Matrix.from_columns("float64", columns)
        self.assertEqual(by_rows, by_cols)
        self.assertEqual(by_rows._data.tolist(), by_cols._data.tolist())

    def test_all_constructors_round_trip(self):
        rows = [[1, 2, 3, 4], [5, 6, 7, 8], [9, 10, 11, 12]]
        flat = [v for row in rows for v in row]
        columns = [list(col) for col in zip(*rows)]
        for m in (
            Matrix.from_flat("int64", flat, 3, 4),
            Matrix.from_rows("int64", rows),
            Matrix.from_columns("int64", columns),
        ):
            with self.subTest(m=m):
                self.assertEqual(_read_back(m), rows)
                self.assertEqual(m.to_rows(), rows)
                self.assertEqual(m.to_columns(), columns)

    def test_ragged_input_is_dimension_error(self):
        with self.assertRaises(DimensionError):
            Matrix.from_rows("int32", [[1, 2], [3]])
        with self.assertRaises(DimensionError):
            Matrix.from_columns("int32", [[1, 2], [3, 4, 5]])

    def test_empty_input_is_dimension_error(self):
        with self.assertRaises(DimensionError):
            Matrix.from_rows("int32", [])
        with self.assertRaises(DimensionError):
            Matrix.from_columns("int32", [[]])

    def test_non_sequence_input(self):
        with self.assertRaises(TypeError):
            Matrix.from_rows("int32", 5)
        with self.assertRaises(TypeError):
            Matrix.from_rows("int32", [1, 2])

    def test_type_mismatch(self):
        with self.assertRaises(TypeMismatchError) as ctx:
            Matrix.from_rows("int32", [[1, 2], [3, 4.0]])
        self.assertIn("(1, 1)", str(ctx.exception))
        with self.assertRaises(TypeMismatchError):
            Matrix.from_columns("float64", [[1.0, 2]])
        with self.assertRaises(TypeMismatchError):
            Matrix.from_flat("int32", [1, 2, 3, 4.5], 2, 2)

    def test_type_mismatch_is_also_type_error(self):
        with self.assertRaises(TypeError):
            Matrix.from_rows("int32", [[1.0]])

    def test_unsupported_dtype(self):
        with self.assertRaises(TypeMismatchError):
            Matrix.from_rows("int8", [[1]])

    def test_from_flat_length_mismatch(self):
        with self.assertRaises(DimensionError):
            Matrix.from_flat("int32", [1, 2, 3], 2, 2)
        with self.assertRaises(DimensionError):
            Matrix.from_flat("int32", [1, 2, 3, 4, 5], 2, 2)

    def test_from_flat_rejects_non_positive_dims(self):
        with self.assertRaises(DimensionError):
            Matrix.from_flat("int32", [], 0, 3)
        with self.assertRaises(DimensionError):
            Matrix.from_flat("int32", [], 2, 0)
        with self.assertRaises(TypeError):
            Matrix.from_flat("int32", [1], 1.0, 1)

    def test_from_flat_adopts_ndarray_storage(self):
        arr = np.array([1, 2, 3, 4], dtype=np.int64)
        m = Matrix.from_flat("int64", arr, 2, 2)
        self.assertIs(m._data, arr)
        arr[3] = 40
        self.assertEqual(m.get(1, 1), 40)

    def test_from_flat_copies_read_only_arrays(self):
        sources = [
            np.broadcast_to(np.int64(0), (4,)),
            np.frombuffer(np.zeros(4, dtype=np.int64).tobytes(), dtype=np.int64),
        ]
        frozen = np.zeros(4, dtype=np.int64)
        frozen.flags.writeable = False
        sources.append(frozen)
        for arr in sources:
            with self.subTest(arr=arr):
                m = Matrix.from_flat("int64", arr, 2, 2)
                self.assertIsNot(m._data, arr)
                m.set_element(0, 0, 1)
                self.assertEqual(m.get(0, 0), 1)
                self.assertEqual(m.version, 1)
                self.assertEqual(arr[0], 0)

    def test_from_flat_ndarray_checks(self):
        with self.assertRaises(TypeMismatchError):
            Matrix.from_flat("int32", np.array([1, 2], dtype=np.int64), 1, 2)
        with self.assertRaises(DimensionError):
            Matrix.from_flat("int64", np.array([1, 2, 3], dtype=np.int64), 1, 2)
        with self.assertRaises(DimensionError):
            Matrix.from_flat("int64", np.zeros((2, 2), dtype=np.int64), 2, 2)

    def test_unchecked_constructor_skips_validation(self):
        data = np.array([1, 2, 3, 4], dtype=np.int32)
        m = Matrix._from_flat_unchecked("int32", data, 2, 2)
        self.assertIs(m._data, data)
        self.assertEqual(m.get(1, 0), 3)

    def test_numpy_scalars_accepted_for_their_variant(self):
        m = Matrix.from_rows("float32", [[np.float32(1.5), 2.0]])
        self.assertEqual(m.dtype, "float32")
        self.assertEqual(m.get(0, 0).dtype, np.float32)
        with self.assertRaises(TypeMismatchError):
            Matrix.from_rows("float32", [[np.float64(1.5)]])

    def test_zero_and_identity(self):
        z = Matrix(2, 3, "int32")
        self.assertEqual(z.to_rows(), [[0, 0, 0], [0, 0, 0]])
        self.assertEqual(Matrix.zeros(1, 2, "float64").to_rows(), [[0.0, 0.0]])
        self.assertEqual(Matrix.zeros(1, 2), Matrix(1, 2))
        eye = mathgl.identity(3, "int32")
        self.assertEqual(eye.to_rows(), [[1, 0, 0], [0, 1, 0], [0, 0, 1]])
        self.assertEqual(Matrix.identity(3, "int32"), eye)
        with self.assertRaises(DimensionError):
            Matrix(0, 2)

    def test_from_numpy(self):
        arr = np.arange(6, dtype=np.int32).reshape(2, 3)
        m = Matrix.from_numpy(arr)
        self.assertEqual(m.dtype, "int32")
        self.assertEqual(m.to_rows(), arr.tolist())
        arr[0, 0] = 99
        self.assertEqual(m.get(0, 0), 0)
        np.testing.assert_array_equal(np.asarray(m), m.to_numpy())
        with self.assertRaises(ValueError):
            m.__array__(copy=False)
        self.assertEqual(m.__array__(copy=True).tolist(), m.to_rows())
        with self.assertRaises(TypeMismatchError):
            Matrix.from_numpy(arr.astype(np.float16))
        with self.assertRaises(TypeMismatchError):
            Matrix.from_numpy(arr, dtype="int64")
        with self.assertRaises(DimensionError):
            Matrix.from_numpy(np.arange(3))


class TestFactories(unittest.TestCase):
    def test_matrix_infers_dtype(self):
        self.assertEqual(mathgl.matrix([[1, 2], [3, 4]]).dtype, "int64")
        self.assertEqual(mathgl.matrix([[1.0, 2.0]]).dtype, "float64")
        self.assertEqual(mathgl.matrix([[1j]]).dtype, "complex_float64")
        self.assertEqual(mathgl.matrix(np.ones((2, 2), dtype=np.float32)).dtype, "float32")

    def test_matrix_explicit_dtype(self):
        m = mathgl.matrix([[1, 2]], dtype=mathgl.int32)
        self.assertEqual(m.dtype, "int32")

    def test_matrix_mixed_kinds_rejected(self):
        with self.assertRaises(TypeMismatchError):
            mathgl.matrix([[1, 2.5]])
        with self.assertRaises(TypeMismatchError):
            mathgl.matrix([[True]])

    def test_vector_factory(self):
        v = mathgl.vector([1, 2, 3])
        self.assertEqual(v.dtype, "int64")
        self.assertEqual(v.to_list(), [1, 2, 3])
        self.assertEqual(mathgl.vector(np.array([1.0], dtype=np.float32)).dtype, "float32")
        with self.assertRaises(TypeError):
            mathgl.vector(3)

    def test_zeros(self):
        self.assertEqual(mathgl.zeros(2, 2, "int32").to_rows(), [[0, 0], [0, 0]])


if __name__ == "__main__":
    unittest.main()
