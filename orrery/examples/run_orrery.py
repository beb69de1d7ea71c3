#!/usr/bin/env python3
"""
Orrery Simulation Example
=========================

Headless run of the orrery: drives the frame loop at a fixed step, prints
the HUD summaries and optionally plots the orbits.
"""

import logging
import time

# Add parent directory to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from orrery.core.config import create_default_config, create_inner_system_config
from orrery.core.simulator import Simulator


def run_quick_simulation(config, seconds: float, dilation: float):
    """Run the frame loop for a number of real seconds."""
    print("=" * 60)
    print(f"{config.title}: {seconds:.0f} s at x{dilation:.1f}")
    print("=" * 60)

    sim = Simulator(config)
    sim.clock.time_dilation = dilation

    start_time = time.time()

    def progress(p):
        print(f"  Progress: {p*100:.0f}%", end='\r')

    sim.run(seconds, progress_callback=progress)

    elapsed = time.time() - start_time
    print(f"\nSimulation complete in {elapsed:.2f}s")
    print(f"  Date: {sim.clock.current_utc:%Y-%m-%d %H:%M} (JD {sim.clock.julian_date:.3f})")
    print(f"  Satellite recoveries: {len(sim.recovery_events)}")

    return sim


def print_hud(sim: Simulator):
    """Print the HUD table for every body."""
    print(f"\n{'Body':>10} {'Radius':>14} {'Speed':>12} {'Day':>10} {'Retro':>6}")
    print("-" * 56)
    for key in sim.bodies:
        info = sim.hud_summary(key)
        print(f"{info.name:>10} {info.orbit_radius_million_km:>10.2f} Mkm "
              f"{info.orbit_speed_km_s:>7.2f} km/s {info.rotation_period_hours:>8.1f} h "
              f"{'yes' if info.retrograde else 'no':>6}")


def plot_orbits(sim: Simulator, out_png: Path):
    """Top-down plot of the orbit loops and current body positions."""
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(figsize=(9, 9))
    for key, path in sim.orbit_paths().items():
        loop = path[list(range(len(path))) + [0]]
        ax.plot(loop[:, 0], loop[:, 2], linewidth=0.8)
        body = sim.body(key)
        ax.plot(body.position[0], body.position[2], 'o', label=body.name)

    if sim.moon is not None:
        ax.plot(sim.moon.position[0], sim.moon.position[2], '.', color='gray',
                label=sim.moon.name)

    ax.plot(0.0, 0.0, '*', color='orange', markersize=12, label=sim.central_body.name)
    ax.set_aspect('equal')
    ax.set_xlabel("X (scene units)")
    ax.set_ylabel("Z (scene units)")
    ax.set_title(f"{sim.config.title} at {sim.clock.current_utc:%Y-%m-%d}")
    ax.grid(True)
    ax.legend(loc='upper right', fontsize='small')

    out_png.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_png, dpi=160)
    plt.close(fig)
    print(f"\nOrbit plot written to {out_png}")


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Orrery Simulation Example")
    parser.add_argument('--seconds', type=float, default=18.0, help='Real seconds to simulate')
    parser.add_argument('--dilation', type=float, default=1.0, help='Time dilation factor')
    parser.add_argument('--inner', action='store_true', help='Sun, Earth and Mars only')
    parser.add_argument('--plot', type=Path, default=None, help='Write orbit plot PNG')
    parser.add_argument('--verbose', action='store_true', help='Debug logging')

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(name)s - %(message)s',
    )

    config = create_inner_system_config() if args.inner else create_default_config()
    sim = run_quick_simulation(config, args.seconds, args.dilation)
    print_hud(sim)

    if args.plot is not None:
        plot_orbits(sim, args.plot)
