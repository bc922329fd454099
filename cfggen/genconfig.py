"""Generation of one C++ file from the sheets and columns of an XML workbook."""

from __future__ import annotations

import os
import xml.etree.ElementTree as ET
from pathlib import Path

from cfggen.genbase import GenBase
from cfggen.gencpp import GenCpp
from cfggen.genhead import GenHead

__all__ = ["GenerateError", "gen"]


class GenerateError(Exception):
    """A generated file could not be produced from its XML workbook."""


def _generator_for(gen_path: Path, xml_name: str) -> GenBase:
    if gen_path.suffix == ".h":
        return GenHead(gen_path, xml_name)
    if gen_path.suffix == ".cpp":
        return GenCpp(gen_path, xml_name)
    raise GenerateError(f"only C++ files can be generated: {gen_path}")


def gen(xml_path: str | os.PathLike, gen_path: str | os.PathLike, xml_name: str) -> None:
    """Fill the template at *gen_path* in place from the workbook at *xml_path*.

    Every child of the document element is a sheet; the columns of a sheet are
    the distinct children of its first row. Raises ``GenerateError`` when a
    file is missing, the XML cannot be read or the target is not C++.
    """
    xml_path = Path(xml_path)
    gen_path = Path(gen_path)
    if not xml_path.exists():
        raise GenerateError(f"xml file {xml_path} does not exist")
    if not gen_path.exists():
        raise GenerateError(f"file to generate {gen_path} does not exist")
    try:
        root = ET.parse(xml_path).getroot()
    except (ET.ParseError, OSError) as exc:
        raise GenerateError(f"cannot read xml file {xml_path}: {exc}") from exc

    generator = _generator_for(gen_path, xml_name)
    generator.replace()
    for sheet in root:
        sheet_name = sheet.tag
        data_node = next(child for child in root if child.tag == sheet_name)
        first_row = next(iter(data_node), None)
        if first_row is None:
            continue
        generator.gen0(sheet_name)
        seen: set[str] = set()
        for column in first_row:
            if column.tag in seen:
                continue
            seen.add(column.tag)
            generator.gen1(column.tag)
        generator.gen2()
    generator.delete()