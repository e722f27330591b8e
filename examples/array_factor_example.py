#!/usr/bin/env python3
"""
Array Factor Tutorial

This example demonstrates the basic phased array workflow:
- Building a planar lattice with conjugate beam-steering weights
- Computing the array factor over the full sphere
- Applying an amplitude taper to lower the sidelobes
- Combining the array factor with an embedded element field
- Saving and plotting the results
"""

import logging
import sys
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np

from phased_array import (
    CalculationConfig, ArrayFactorEngine, ConjugateWeighting, TaperedWeighting,
    Direction, Field, E_THETA, build_lattice, equally_spaced_sphere,
    combine_fields, save_field_npz, plot_field_cut, plot_field_2d
)


def print_section_header(title):
    """Print a formatted section header."""
    print("\n" + "="*60)
    print(f"{title}")
    print("="*60)


def print_field_info(field, name="Field"):
    """Print basic information about a field."""
    peak = field.peak_direction(field.channel_names[0])
    gain_db = field.get_gain_db(field.channel_names[0]).values
    print(f"\n{name} Information:")
    print(f"  Directions: {len(field)}")
    print(f"  Channels: {', '.join(field.channel_names)}")
    print(f"  Frequency: {field.frequency/1e9:.3f} GHz")
    print(f"  Peak at theta={peak.theta_deg:.1f}°, phi={peak.phi_deg:.1f}°")
    print(f"  Peak magnitude: {np.max(gain_db):.2f} dB")


def main():
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stdout)]
    )

    output_dir = Path(__file__).parent / 'output'
    output_dir.mkdir(exist_ok=True)

    frequency = 2e9
    pointing = Direction.from_degrees(103, -1.5)
    directions = equally_spaced_sphere(1)
    engine = ArrayFactorEngine(CalculationConfig())

    # ========================================================================
    print_section_header("STEP 1: STEERED 1x8x4 ARRAY")
    # ========================================================================
    steering = ConjugateWeighting.from_frequency(frequency, pointing)
    array = build_lattice(1, 8, 4, 0.5, 0.5, 0.5, frequency, steering)
    print(f"Built {array}")

    array_factor = engine.compute(frequency, array, directions)
    print_field_info(array_factor, "Array factor")

    # ========================================================================
    print_section_header("STEP 2: HAMMING TAPER")
    # ========================================================================
    tapered_weighting = TaperedWeighting.for_lattice(
        steering, (1, 8, 4), (0.5, 0.5, 0.5), frequency, window='hamming')
    tapered_array = build_lattice(1, 8, 4, 0.5, 0.5, 0.5, frequency, tapered_weighting)
    tapered_factor = engine.compute(frequency, tapered_array, directions)
    print_field_info(tapered_factor, "Tapered array factor")

    # ========================================================================
    print_section_header("STEP 3: COMBINE WITH EMBEDDED ELEMENT FIELD")
    # ========================================================================
    # Simple cos^1.5 element pattern looking along +x
    element = np.array([max(d.unit_vector()[0], 0.0) ** 1.5 for d in directions], dtype=complex)
    embedded = Field(directions, {E_THETA: element}, frequency)

    realized = combine_fields(embedded, array_factor)
    print_field_info(realized, "Realized pattern")

    save_field_npz(realized, output_dir / 'realized_pattern.npz')

    # ========================================================================
    print_section_header("STEP 4: PLOTS")
    # ========================================================================
    fig, ax = plt.subplots(figsize=(10, 6))
    plot_field_cut(array_factor, phi=0, ax=ax, title="Uniform vs. Hamming taper, phi = 0°")
    plot_field_cut(tapered_factor, phi=0, ax=ax, title="Uniform vs. Hamming taper, phi = 0°")
    ax.legend(['Uniform', 'Hamming'])
    fig.savefig(output_dir / 'taper_comparison.png', dpi=150)

    fig = plot_field_2d(realized, channel=E_THETA)
    fig.savefig(output_dir / 'realized_pattern_map.png', dpi=150)

    plt.show()
    return 0


if __name__ == "__main__":
    sys.exit(main())
