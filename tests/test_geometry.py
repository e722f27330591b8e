"""
Tests for directions and antenna array construction.
"""
import math

import numpy as np
import pytest
from phased_array import (
    Direction,
    equally_spaced_sphere,
    directions_from_degrees,
    directions_to_arrays,
    ArrayBuilder,
    AntennaArray,
    ConjugateWeighting,
    InvalidGeometryError,
    build_lattice,
    build_equally_spaced,
    build_planar,
    build_from_points,
    lightspeed,
)


def test_direction_from_degrees():
    """Test that degree and radian construction agree and compare by value."""
    d1 = Direction.from_degrees(90, 45)
    d2 = Direction.from_radians(math.pi / 2, math.pi / 4)

    assert d1 == d2
    assert hash(d1) == hash(d2)
    assert len({d1, d2}) == 1
    assert d1.theta_deg == pytest.approx(90)
    assert d1.phi_deg == pytest.approx(45)


def test_direction_is_immutable():
    """Test that a direction cannot be modified."""
    direction = Direction.from_degrees(10, 20)
    with pytest.raises(AttributeError):
        direction.theta = 0.5


def test_direction_validation():
    """Test theta range validation and phi wrapping."""
    with pytest.raises(ValueError):
        Direction.from_degrees(181, 0)
    with pytest.raises(ValueError):
        Direction.from_degrees(-1, 0)
    with pytest.raises(ValueError):
        Direction(float('nan'), 0.0)

    wrapped = Direction.from_degrees(45, 270)
    assert wrapped.phi_deg == pytest.approx(-90)
    assert Direction.from_degrees(45, 180).phi == math.pi
    assert Direction.from_degrees(45, -180).phi == -math.pi


def test_direction_unit_vector():
    """Test the Cartesian unit vector of principal directions."""
    np.testing.assert_allclose(Direction.from_degrees(0, 0).unit_vector(), [0, 0, 1], atol=1e-15)
    np.testing.assert_allclose(Direction.from_degrees(90, 0).unit_vector(), [1, 0, 0], atol=1e-15)
    np.testing.assert_allclose(Direction.from_degrees(90, 90).unit_vector(), [0, 1, 0], atol=1e-15)


def test_equally_spaced_sphere():
    """Test the size and ordering of a sphere sampling."""
    directions = equally_spaced_sphere(90)

    # theta: 0, 90, 180; phi: -180, -90, 0, 90, 180
    assert len(directions) == 15
    assert directions[0] == Direction.from_degrees(0, -180)
    assert directions[7] == Direction.from_degrees(90, 0)
    assert directions[-1] == Direction.from_degrees(180, 180)

    assert len(equally_spaced_sphere(1)) == 181 * 361
    assert Direction.from_degrees(90, 0) in equally_spaced_sphere(1)

    with pytest.raises(ValueError):
        equally_spaced_sphere(0)


def test_directions_to_arrays():
    """Test splitting directions into angle arrays."""
    directions = directions_from_degrees([(0, 0), (90, 90), (180, -90)])
    theta, phi = directions_to_arrays(directions)

    np.testing.assert_allclose(np.degrees(theta), [0, 90, 180])
    np.testing.assert_allclose(np.degrees(phi), [0, 90, -90])


@pytest.mark.parametrize("count_x,count_y,count_z", [(1, 1, 1), (1, 24, 16), (2, 3, 4), (5, 1, 2)])
def test_lattice_element_count(count_x, count_y, count_z):
    """Test that a lattice has one element per lattice index."""
    array = build_lattice(count_x, count_y, count_z, 0.5, 0.5, 0.5, 1e9)
    assert len(array) == count_x * count_y * count_z
    assert array.positions.shape == (count_x * count_y * count_z, 3)


@pytest.mark.parametrize("counts,axis,value", [
    ((0, 1, 1), 'x', 0),
    ((1, 0, 1), 'y', 0),
    ((1, 1, -2), 'z', -2),
])
def test_lattice_invalid_size(counts, axis, value):
    """Test that a lattice dimension below one is rejected at construction."""
    with pytest.raises(InvalidGeometryError) as excinfo:
        build_lattice(*counts, 0.5, 0.5, 0.5, 1e9)

    message = str(excinfo.value)
    assert f"{axis} dimension" in message
    assert str(value) in message
    assert isinstance(excinfo.value, ValueError)


def test_lattice_invalid_frequency():
    """Test that a non-positive design frequency is rejected."""
    with pytest.raises(InvalidGeometryError):
        build_lattice(2, 2, 2, 0.5, 0.5, 0.5, 0.0)


def test_lattice_positions_and_order():
    """Test element placement and x-major, then y, then z ordering."""
    frequency = 3e9
    wavelength = lightspeed / frequency
    array = build_lattice(2, 3, 4, 0.5, 0.25, 1.0, frequency)

    dx, dy, dz = 0.5 * wavelength, 0.25 * wavelength, 1.0 * wavelength
    for i in range(2):
        for j in range(3):
            for k in range(4):
                index = i * 12 + j * 4 + k
                np.testing.assert_allclose(array[index].position, [i * dx, j * dy, k * dz])

    assert all(element.frequency == frequency for element in array)
    assert array.design_frequency == frequency


def test_lattice_default_weighting():
    """Test that lattices without a weighting have unit weights."""
    array = build_lattice(2, 2, 1, 0.5, 0.5, 0.5, 1e9)
    np.testing.assert_array_equal(array.weights, np.ones(4, dtype=complex))


def test_lattice_convenience_builders():
    """Test that convenience builders match the general lattice form exactly."""
    frequency = 28e9
    weighting = ConjugateWeighting.from_frequency(frequency, Direction.from_degrees(100, 10))

    equal = build_equally_spaced(2, 3, 4, 0.5, frequency, weighting)
    general = build_lattice(2, 3, 4, 0.5, 0.5, 0.5, frequency, weighting)
    np.testing.assert_array_equal(equal.positions, general.positions)
    np.testing.assert_array_equal(equal.weights, general.weights)

    planar = build_planar(24, 16, 0.5, 0.5, frequency, weighting)
    general = build_lattice(1, 24, 16, 0.0, 0.5, 0.5, frequency, weighting)
    np.testing.assert_array_equal(planar.positions, general.positions)
    np.testing.assert_array_equal(planar.weights, general.weights)
    assert np.all(planar.positions[:, 0] == 0)


def test_build_from_points():
    """Test building an array from explicit points."""
    frequency = 10e9
    points = [(0.0, 0.0, 0.0), (0.01, 0.0, 0.0), (0.0, 0.02, 0.005)]
    weighting = ConjugateWeighting.from_frequency(frequency, Direction.from_degrees(30, 60))

    array = build_from_points(points, frequency, weighting)

    assert len(array) == 3
    np.testing.assert_allclose(array.positions, points)
    for element, point in zip(array, points):
        assert element.frequency == frequency
        np.testing.assert_allclose(element.weight, weighting.weight(np.array(point)), atol=1e-13)


def test_build_from_points_invalid():
    """Test that malformed point lists are rejected."""
    with pytest.raises(InvalidGeometryError):
        build_from_points([], 1e9)
    with pytest.raises(InvalidGeometryError):
        build_from_points([(0.0, 0.0)], 1e9)
    with pytest.raises(InvalidGeometryError):
        build_from_points([(0.0, np.inf, 0.0)], 1e9)


def test_array_builder():
    """Test incremental array assembly."""
    frequency = 5e9
    builder = (ArrayBuilder()
               .set_design_frequency(frequency)
               .add_position([0, 0, 0])
               .add_positions([[0, 0.03, 0], [0, 0.06, 0]]))

    array = builder.build()

    assert isinstance(array, AntennaArray)
    assert len(array) == 3
    np.testing.assert_allclose(array.positions[:, 1], [0, 0.03, 0.06])
    np.testing.assert_array_equal(array.weights, np.ones(3, dtype=complex))


def test_array_builder_requires_frequency_and_points():
    """Test that the builder rejects incomplete input."""
    with pytest.raises(InvalidGeometryError):
        ArrayBuilder().add_position([0, 0, 0]).build()
    with pytest.raises(InvalidGeometryError):
        ArrayBuilder().set_design_frequency(1e9).build()
    with pytest.raises(InvalidGeometryError):
        ArrayBuilder().add_position([0, 0])


def test_array_is_read_only():
    """Test that array data cannot be modified after construction."""
    array = build_lattice(2, 2, 2, 0.5, 0.5, 0.5, 1e9)

    with pytest.raises(ValueError):
        array.positions[0, 0] = 1.0
    with pytest.raises(ValueError):
        array.weights[0] = 2.0
    with pytest.raises(ValueError):
        array[0].position[0] = 1.0
