"""Spatial-Tiler main executable."""

import argparse
import json
import logging
from typing import Any, List, Optional

from spatial_tiler.constants import DEFAULT_GEOHASH_PRECISION, DEFAULT_H3_RES, DEFAULT_POINT_GEOHASH_PRECISION
from spatial_tiler.data_model.geo_config import GeoConfig
from spatial_tiler.engine import GeoEngine
from spatial_tiler.utils.config import read_json_config, read_yaml_config

OPERATIONS = (
    "decode",
    "intersects",
    "contains",
    "contains-point",
    "area",
    "geohash-cover",
    "h3-cover",
    "h3-bbox-cover",
    "geohash",
    "h3-cell",
)


def arg_parser(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command line arguments.

    :param argv: Arguments to parse. Defaults to sys.argv.
    :return: Parsed command-line arguments.
    """
    parser = argparse.ArgumentParser(
        description='Decode, relate and cover geometries.'
    )

    # Create a mutually exclusive group for the config options
    config_group = parser.add_mutually_exclusive_group()

    config_group.add_argument(
        '--yaml-path',
        dest="yaml_path",
        type=str,
        help='Path to the geometry model yaml config file.'
    )

    config_group.add_argument(
        '--json-input',
        dest="json_input",
        type=str,
        help='Geometry model JSON config.'
    )

    parser.add_argument('--operation', required=True, choices=OPERATIONS, help='Operation to run.')
    parser.add_argument('--geometry', type=str, help='WKT or GeoJSON geometry.')
    parser.add_argument('--other', type=str, help='Second WKT or GeoJSON geometry.')
    parser.add_argument('--lat', type=float, help='Latitude.')
    parser.add_argument('--lon', type=float, help='Longitude.')
    parser.add_argument(
        '--bbox',
        type=float,
        nargs=4,
        metavar=('MIN_LAT', 'MIN_LON', 'MAX_LAT', 'MAX_LON'),
        help='Latitude/longitude bounding box.'
    )
    parser.add_argument('--precision', type=int, help='Geohash precision (1-12).')
    parser.add_argument('--resolution', type=int, help='H3 resolution (0-15).')

    return parser.parse_args(argv)


def load_config(args: argparse.Namespace) -> GeoConfig:
    """
    Load the geometry model config named by the arguments.

    :param args: Parsed command-line arguments.
    :return: GeoConfig, the defaults when no config is given.
    """
    if args.yaml_path:
        return read_yaml_config(args.yaml_path)
    if args.json_input:
        return read_json_config(json.loads(args.json_input))
    return GeoConfig()


def run_operation(engine: GeoEngine, args: argparse.Namespace) -> Any:
    """
    Run the requested operation.

    :param engine: Configured GeoEngine.
    :param args: Parsed command-line arguments.
    :return: JSON-serializable result.
    """
    operation = args.operation

    if operation == "decode":
        shape = engine.decode(args.geometry)
        if shape is None:
            return None
        return {"kind": shape.kind.value, "bounding_box": shape.bounding_box.model_dump()}
    elif operation == "intersects":
        return engine.intersects(args.geometry, args.other)
    elif operation == "contains":
        return engine.contains(args.geometry, args.other)
    elif operation == "contains-point":
        return engine.contains_point(args.geometry, args.lat, args.lon)
    elif operation == "area":
        return engine.area(args.geometry)
    elif operation == "geohash-cover":
        return engine.cover_with_rectangular_grid(args.geometry, args.precision)
    elif operation == "h3-cover":
        return engine.cover_with_hexagonal_grid(args.geometry, args.resolution)
    elif operation == "h3-bbox-cover":
        if args.bbox is None:
            raise ValueError("--bbox is required for h3-bbox-cover")
        return engine.cover_bounding_box_with_hexagonal_grid(*args.bbox, args.resolution)
    elif operation == "geohash":
        return engine.point_to_geohash(args.lat, args.lon, args.precision)
    elif operation == "h3-cell":
        return engine.point_to_h3_cell(args.lat, args.lon, args.resolution)
    else:
        raise ValueError(f"Unrecognized operation: {operation}")


def main(argv: Optional[List[str]] = None) -> Any:
    """
    Parse arguments, run the operation and print the result as JSON.

    :param argv: Arguments to parse. Defaults to sys.argv.
    :return: The operation result.
    """
    args = arg_parser(argv)

    # default precision and resolution depend on the operation
    if args.precision is None:
        args.precision = (
            DEFAULT_POINT_GEOHASH_PRECISION if args.operation == "geohash" else DEFAULT_GEOHASH_PRECISION
        )
    if args.resolution is None:
        args.resolution = DEFAULT_H3_RES

    config = load_config(args)
    engine = GeoEngine(config.model_dump())

    logging.info(f"Running {args.operation}...")
    result = run_operation(engine, args)
    print(json.dumps(result))
    return result


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main()
