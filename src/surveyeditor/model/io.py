"""
Input/Output Manager
Handles SIM coordinate exchange files and saving/loading point sets to .h5 project files.
"""
from __future__ import annotations

import csv
import logging
from dataclasses import dataclass
from importlib.metadata import version, PackageNotFoundError
from typing import Iterable, List

import h5py
import numpy as np

from surveyeditor.model.points import CoordinatePoint, PointType, round_coordinate

# Get module logger
logger = logging.getLogger(__name__)

try:
    APP_VERSION = version("surveyeditor")
except PackageNotFoundError:
    APP_VERSION = "0.0.0-dev"

SIM_HEADER = (
    "# Coordinate data SIM file",
    "# point name,X (m),Y (m),Z (m)",
)


@dataclass(frozen=True)
class SimRecord:
    """A single row of a SIM file (no id or type, those belong to the store)."""
    point_name: str
    x: float
    y: float
    z: float


def read_sim(filepath: str) -> List[SimRecord]:
    """
    Parse a SIM file: `name,x,y,z` rows, '#' comments and blank lines skipped.
    Rows with fewer than 4 columns are ignored.
    """
    logger.info(f"Reading SIM file: {filepath}")
    records: List[SimRecord] = []
    with open(filepath, "r", encoding="utf-8", newline="") as f:
        for line_no, row in enumerate(csv.reader(f), start=1):
            if not row or not "".join(row).strip():
                continue
            if row[0].lstrip().startswith("#"):
                continue
            if len(row) < 4:
                logger.debug(f"Skipping short SIM row {line_no}: {row}")
                continue
            try:
                x, y, z = (float(v) for v in row[1:4])
            except ValueError:
                x = y = z = np.nan
            if not np.all(np.isfinite([x, y, z])):
                raise ValueError(f"Invalid coordinate on line {line_no} of '{filepath}'.")
            records.append(SimRecord(row[0].strip(), round_coordinate(x), round_coordinate(y), round_coordinate(z)))

    logger.info(f"Read {len(records)} points from SIM file.")
    return records


def write_sim(filepath: str, points: Iterable[CoordinatePoint]) -> int:
    """Write points to a SIM file. Returns the number of rows written."""
    n = 0
    with open(filepath, "w", encoding="utf-8", newline="") as f:
        for line in SIM_HEADER:
            f.write(line + "\n")
        writer = csv.writer(f, lineterminator="\n")
        for p in points:
            writer.writerow([p.point_name, f"{p.x:.3f}", f"{p.y:.3f}", f"{p.z:.3f}"])
            n += 1
    logger.info(f"Wrote {n} points to SIM file: {filepath}")
    return n


class IOManager:
    @staticmethod
    def save_project(points: List[CoordinatePoint], filepath: str, project_name: str = "Untitled Project") -> None:
        logger.info(f"Saving project to: {filepath}")
        try:
            with h5py.File(filepath, "w") as f:
                f.attrs["version"] = APP_VERSION
                f.attrs["project_name"] = project_name

                str_dtype = h5py.string_dtype(encoding="utf-8")
                grp = f.create_group("points")
                grp.attrs["count"] = len(points)
                grp.create_dataset("ids", data=np.array([p.id for p in points], dtype=object), dtype=str_dtype)
                grp.create_dataset("names", data=np.array([p.point_name for p in points], dtype=object), dtype=str_dtype)
                grp.create_dataset("types", data=np.array([str(p.type) for p in points], dtype=object), dtype=str_dtype)

                # Stack coordinates into a (N, 3) matrix
                coords = np.array([[p.x, p.y, p.z] for p in points], dtype=np.float64).reshape(-1, 3)
                # gzip needs chunked storage, which an empty dataset cannot have
                grp.create_dataset("coordinates", data=coords, compression="gzip" if points else None)
                grp.create_dataset("visible", data=np.array([p.visible for p in points], dtype=bool))

            logger.info(f"Project saved to: {filepath}")

        except Exception as e:
            logger.exception(f"Failed to save project: {e}")
            raise e

    @staticmethod
    def load_project(filepath: str) -> List[CoordinatePoint]:
        logger.info(f"Loading project from: {filepath}")
        if not h5py.is_hdf5(filepath):
            msg = f"File '{filepath}' is not a valid HDF5 file."
            logger.error(msg)
            raise ValueError(msg)

        try:
            with h5py.File(filepath, "r") as f:
                if "points" not in f:
                    logger.warning("Project file contains no points.")
                    return []

                grp = f["points"]
                ids = grp["ids"].asstr()[:]
                names = grp["names"].asstr()[:]
                types = grp["types"].asstr()[:]
                coords = grp["coordinates"][:]
                visible = grp["visible"][:]

                points = [
                    CoordinatePoint(
                        id=str(ids[i]),
                        point_name=str(names[i]),
                        x=round_coordinate(coords[i, 0]),
                        y=round_coordinate(coords[i, 1]),
                        z=round_coordinate(coords[i, 2]),
                        type=PointType(types[i]),
                        visible=bool(visible[i]),
                    )
                    for i in range(len(ids))
                ]

            logger.info(f"Loaded {len(points)} points.")
            return points

        except Exception as e:
            logger.exception(f"Failed to load project: {e}")
            raise e
