#!/usr/bin/env python3
"""
Bluebikes Traffic Map - Unified CLI
===================================
Station traffic overlay for Boston/Cambridge bike share.

Usage:
    python main.py generate [--output PATH]
    python main.py snapshot [--minute M] [--zoom Z] [--width W] [--height H]
    python main.py info     # Show dataset info

Examples:
    python main.py generate
    python main.py snapshot --minute 480 --zoom 13
    python main.py info --trips data/bluebikes-traffic-2024-03.csv
"""

import argparse
import logging

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(message)s'
)
logger = logging.getLogger(__name__)


def print_header(title: str) -> None:
    """Print a styled header."""
    print("\n" + "=" * 60)
    print(f"  {title}")
    print("=" * 60)


def build_loader(args):
    """Create a loader honoring --stations / --trips overrides."""
    from bikemap.data.bikeshare_loader import BikeDataLoader
    from bikemap.config import STATIONS_URL, TRIPS_URL

    return BikeDataLoader(
        stations_source=args.stations or STATIONS_URL,
        trips_source=args.trips or TRIPS_URL,
    )


def report_saved(output_path) -> None:
    file_size = output_path.stat().st_size / (1024 * 1024)
    print(f"   ✅ Saved: {output_path.name} ({file_size:.2f} MB)")


def cmd_generate(args) -> None:
    """Generate the interactive traffic map."""
    from bikemap.generators import TrafficMapGenerator

    print_header("Bluebikes Traffic Map Generator")

    print("\n📦 Loading bikeshare data...")
    generator = TrafficMapGenerator(build_loader(args))

    print("\n🔧 Generating Traffic Map...")
    report_saved(generator.save(args.output))


def cmd_snapshot(args) -> None:
    """Render a PNG snapshot for one time filter."""
    from bikemap.generators import SnapshotGenerator
    from bikemap.models import Camera
    from bikemap.config import NO_FILTER, MINUTES_PER_DAY

    if args.minute != NO_FILTER and not 0 <= args.minute < MINUTES_PER_DAY:
        raise SystemExit(f"--minute must be {NO_FILTER} or in [0, {MINUTES_PER_DAY})")

    print_header("Bluebikes Traffic Snapshot")

    camera = Camera(zoom=args.zoom, width=args.width, height=args.height)
    generator = SnapshotGenerator(build_loader(args), minute=args.minute, camera=camera)

    print("\n🔧 Rendering snapshot...")
    report_saved(generator.save(args.output))


def cmd_info(args) -> None:
    """Show dataset information."""
    from bikemap.controller import InteractionController

    print_header("Bluebikes Dataset Info")

    loader = build_loader(args)

    print("\n📊 Dataset sizes:")
    print(f"   Lane layers: {len(loader.lanes)} ({', '.join(loader.lanes) or 'none'})")
    print(f"   Stations:    {len(loader.stations):,} rows")
    print(f"   Trips:       {len(loader.trips):,} rows")

    controller = InteractionController(loader.stations, loader.trips)
    traffic = controller.context.traffic
    print(f"\n⭕ Radius domain: [0, {controller.renderer.max_traffic}]")

    busiest = traffic.sort_values('total_traffic', ascending=False).head(5)
    print("\n🚲 Busiest stations:")
    for _, row in busiest.iterrows():
        print(f"   {row['short_name']:>8}  {row['total_traffic']:>6,} trips  {row.get('name', '')}")


def main():
    from bikemap.config import NO_FILTER, DEFAULT_ZOOM, DEFAULT_VIEWPORT

    parser = argparse.ArgumentParser(
        description='Bluebikes Traffic Map - Generate station traffic visualizations',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    # Data source overrides shared by every command
    sources = argparse.ArgumentParser(add_help=False)
    sources.add_argument('--stations', help='Station roster JSON (URL or path)')
    sources.add_argument('--trips', help='Trip log CSV (URL or path)')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # Generate command
    gen_parser = subparsers.add_parser('generate', parents=[sources], help='Generate the interactive map')
    gen_parser.add_argument('--output', help='Output HTML path (default: outputs/traffic_map.html)')
    gen_parser.set_defaults(func=cmd_generate)

    # Snapshot command
    snap_parser = subparsers.add_parser('snapshot', parents=[sources], help='Render a PNG snapshot')
    snap_parser.add_argument('--minute', type=int, default=NO_FILTER,
                             help=f'Minutes since midnight ({NO_FILTER} for any time)')
    snap_parser.add_argument('--zoom', type=float, default=DEFAULT_ZOOM, help='Map zoom level')
    snap_parser.add_argument('--width', type=int, default=DEFAULT_VIEWPORT[0], help='Image width in pixels')
    snap_parser.add_argument('--height', type=int, default=DEFAULT_VIEWPORT[1], help='Image height in pixels')
    snap_parser.add_argument('--output', help='Output PNG path (default: outputs/traffic_snapshot.png)')
    snap_parser.set_defaults(func=cmd_snapshot)

    # Info command
    info_parser = subparsers.add_parser('info', parents=[sources], help='Show dataset information')
    info_parser.set_defaults(func=cmd_info)

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return

    args.func(args)


if __name__ == '__main__':
    main()
