"""Regeneration of config loader sources whose XML workbooks changed."""

from __future__ import annotations

import logging
import os
import re
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import NamedTuple

from cfggen.genbase import to_file_name
from cfggen.genconfig import GenerateError, gen

__all__ = ["FileData", "get_files_time", "compare_files_time"]

logger = logging.getLogger(__name__)


@dataclass
class FileData:
    """A file and its last write time in whole seconds since the epoch."""

    full_file_name: str
    last_write_time: int = 0


def get_files_time(
    path_name: str | os.PathLike, pattern: str, compare_time: bool = True
) -> dict[str, FileData]:
    """Map the stem of every file under *path_name* whose extension matches *pattern*.

    Of several files with the same stem the oldest is kept when
    *compare_time* is true, otherwise the first one found. A missing
    directory yields an empty mapping.
    """
    root = Path(path_name)
    if not root.exists():
        logger.warning("path %s does not exist", root)
        return {}
    regex = re.compile(pattern)
    files: dict[str, FileData] = {}
    for path in sorted(root.rglob("*")):
        if not path.is_file() or not regex.search(path.suffix):
            continue
        data = FileData(str(path), int(path.stat().st_mtime))
        current = files.get(path.stem)
        if current is None:
            files[path.stem] = data
        elif compare_time and data.last_write_time < current.last_write_time:
            files[path.stem] = data
    return files


class _Target(NamedTuple):
    template: Path
    gen_file: Path
    xml_name: str
    can_cover: bool


def _targets(xml_dir: Path, gen_dir: Path, file_name: str, xml_name: str) -> list[_Target]:
    impl_name = xml_name + "_impl"
    return [
        _Target(xml_dir / "template_config.cpp", gen_dir / f"{file_name}.cpp", xml_name, True),
        _Target(xml_dir / "template_config.h", gen_dir / f"{file_name}.h", xml_name, True),
        _Target(xml_dir / "inherit_config.cpp", gen_dir / f"{file_name}impl.cpp", impl_name, False),
        _Target(xml_dir / "inherit_config.h", gen_dir / f"{file_name}impl.h", impl_name, False),
    ]


def compare_files_time(
    xml_path: str | os.PathLike, cpp_path: str | os.PathLike, compare_time: bool = True
) -> list[Path]:
    """Regenerate the sources of every workbook newer than its generated files.

    With *compare_time* false every workbook is regenerated. Existing
    ``impl`` files are never overwritten. Returns the files generated.
    Raises ``FileNotFoundError`` when a template is missing from *xml_path*.
    """
    xml_dir = Path(xml_path)
    cpp_dir = Path(cpp_path)
    xml_files = get_files_time(xml_dir, r"\.xml", compare_time)
    cpp_files = get_files_time(cpp_dir, r"\.(cpp|h)", compare_time)
    generated: list[Path] = []
    for xml_name, xml_data in sorted(xml_files.items()):
        file_name = to_file_name(xml_name)
        existing = cpp_files.get(file_name)
        if (
            existing is not None
            and compare_time
            and xml_data.last_write_time <= existing.last_write_time
        ):
            continue

        gen_dir = cpp_dir / file_name
        gen_dir.mkdir(parents=True, exist_ok=True)
        targets = _targets(xml_dir, gen_dir, file_name, xml_name)
        for target in targets:
            if not target.template.exists():
                raise FileNotFoundError(f"template {target.template} does not exist")
        for target in targets:
            if not target.can_cover and target.gen_file.exists():
                continue
            shutil.copyfile(target.template, target.gen_file)
            try:
                gen(xml_data.full_file_name, target.gen_file, target.xml_name)
            except GenerateError as exc:
                logger.warning("%s", exc)
                continue
            generated.append(target.gen_file)
    return generated