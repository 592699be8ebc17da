"""Tests for points, strokes, gestures and affine transforms."""

import numpy as np
import pytest

from gesture_features.geometry import (
    Gesture,
    InvalidInputError,
    Point2D,
    Rect,
    Stroke,
    Transform,
    as_points,
)


class TestAsPoints:
    def test_flat_vector(self):
        pts = as_points([0, 1, 2, 3])
        assert pts.shape == (2, 2)
        np.testing.assert_array_equal(pts[1], [2, 3])

    def test_odd_flat_vector_rejected(self):
        with pytest.raises(InvalidInputError):
            as_points([0, 1, 2])

    def test_wrong_width_rejected(self):
        with pytest.raises(InvalidInputError):
            as_points(np.zeros((4, 3)))


class TestPoint2D:
    def test_immutable(self):
        p = Point2D(1.0, 2.0)
        with pytest.raises(AttributeError):
            p.x = 3.0

    def test_distance(self):
        assert Point2D(0, 0).distance_to(Point2D(3, 4)) == pytest.approx(5.0)


class TestStroke:
    def test_length_computed(self):
        stroke = Stroke(np.array([[0, 0], [3, 4], [3, 10]]))
        assert stroke.length == pytest.approx(11.0)

    def test_length_supplied(self):
        stroke = Stroke(np.array([[0, 0], [1, 0]]), length=7.5)
        assert stroke.length == 7.5

    def test_from_points(self):
        stroke = Stroke.from_points([Point2D(0, 0), Point2D(2, 0), (2, 2)])
        assert len(stroke) == 3
        assert stroke.point(2) == Point2D(2.0, 2.0)
        assert stroke.length == pytest.approx(4.0)

    def test_empty_rejected(self):
        with pytest.raises(InvalidInputError):
            Stroke(np.zeros((0, 2)))

    def test_bounding_box(self):
        stroke = Stroke(np.array([[1, 5], [4, -2], [0, 3]]))
        box = stroke.bounding_box
        assert (box.left, box.top, box.right, box.bottom) == (0, -2, 4, 5)


class TestGesture:
    def test_bounding_box_spans_strokes(self):
        gesture = Gesture.from_lists([[[0, 0], [5, 0]], [[2, -3], [2, 8]]])
        box = gesture.bounding_box
        assert box.width == 5
        assert box.height == 11
        assert box.center_x == pytest.approx(2.5)
        assert box.center_y == pytest.approx(2.5)

    def test_empty_gesture_has_no_box(self):
        with pytest.raises(InvalidInputError):
            Gesture().bounding_box

    def test_add_stroke_keeps_order(self):
        gesture = Gesture()
        first = Stroke(np.array([[0, 0], [1, 0]]))
        second = Stroke(np.array([[0, 1], [1, 1]]))
        gesture.add_stroke(first)
        gesture.add_stroke(second)
        assert gesture.strokes[0] is first
        assert gesture.strokes[1] is second
        assert gesture.stroke_count == 2
        assert gesture.length == pytest.approx(2.0)

    def test_lists_round_trip(self):
        strokes = [[[0.0, 0.0], [1.0, 2.0]], [[3.0, 3.0], [4.0, 1.0], [5.0, 0.0]]]
        assert Gesture.from_lists(strokes).to_lists() == strokes

    def test_all_points(self):
        gesture = Gesture.from_lists([[[0, 0], [1, 0]], [[2, 2], [3, 3], [4, 4]]])
        assert gesture.all_points().shape == (5, 2)


class TestRect:
    def test_union(self):
        a = Rect(0, 0, 1, 1)
        b = Rect(-1, 0.5, 0.5, 3)
        assert a.union(b) == Rect(-1, 0, 1, 3)


class TestTransform:
    def test_translate(self):
        out = Transform.translate(2, -1).map_points([[0, 0], [1, 1]])
        np.testing.assert_allclose(out, [[2, -1], [3, 0]])

    def test_rotate_quarter_turn(self):
        out = Transform.rotate(90).map_points([[1, 0]])
        np.testing.assert_allclose(out, [[0, 1]], atol=1e-12)

    def test_pre_concat_applies_first(self):
        # scale after translate: (1 + 1) * 2 = 4
        trans = Transform.scale(2).pre_concat(Transform.translate(1, 1))
        np.testing.assert_allclose(trans.map_points([[1, 1]]), [[4, 4]])

    def test_post_concat_applies_last(self):
        # translate after scale: 1 * 2 + 1 = 3
        trans = Transform.scale(2).post_concat(Transform.translate(1, 1))
        np.testing.assert_allclose(trans.map_points([[1, 1]]), [[3, 3]])

    def test_map_points_does_not_modify_input(self):
        pts = np.array([[1.0, 2.0]])
        Transform.translate(5, 5).map_points(pts)
        np.testing.assert_array_equal(pts, [[1.0, 2.0]])
