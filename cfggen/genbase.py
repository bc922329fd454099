"""Shared naming rules and state for generating config loader sources."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path

from cfggen.sed import EditType, sed

__all__ = ["CalcTypeResult", "GenBase", "to_def_name", "to_file_name", "to_class_name"]


def to_def_name(name: str) -> str:
    """Upper-case name used for include guards."""
    return name.upper()


def to_file_name(name: str) -> str:
    """Lower-case name with underscores removed."""
    return name.lower().replace("_", "")


def to_class_name(name: str) -> str:
    """Camel-case name: the first letter and every letter after ``_`` upper-cased."""
    chars = []
    previous = ""
    for c in name:
        chars.append(c.upper() if previous in ("", "_") else c)
        previous = c
    return "".join(chars).replace("_", "")


@dataclass
class CalcTypeResult:
    """The C++ type chosen for a column and how it is declared."""

    type_name: str
    variable_name: str
    need_init: bool = True
    need_declare: bool = True


_REWARD_ITEM = re.compile(r"reward_*item")
_DROP = re.compile(r"drop")
_AREA = re.compile(r"area")
_ITEM_ID = re.compile(r"item_*id|stuff_*id|equip_*id")
_ATTR = re.compile(r"attr_type_\d|attr_value_\d")
_STR = re.compile(r"str")
_WEIGHT_LIST = re.compile(r"weight_list")
_PARAMETER_LIST = re.compile(r"_\d+parameter_list")
_PARAMETER = re.compile(r"_\d+parameter")
_SEPARATED = re.compile(r"(_comma_pipe)|(_pipe_comma)|(_comma)|(_pipe)")

_INDEX_KEY = re.compile(r"index")
_MAP_KEY = re.compile(r"key|_range|_rrange")
_RANDOM_KEY = re.compile(r"rand_exclude|rand")
_PARAMETER_COUNT = re.compile(r"_(\d+)parameter")

VECTOR_KEY = "std::vector<"
MAP_KEY = "std::map<int, "
RANDOM_KEY = "lmb::RandomVector<int, "


class GenBase:
    """Collects sheet and column names and fills the markers of a generated file."""

    def __init__(self, gen_path: str | os.PathLike, xml_name: str) -> None:
        self.gen_path = Path(gen_path)
        self.def_name = to_def_name(xml_name)
        self.file_name = to_file_name(xml_name)
        self.class_name = to_class_name(xml_name)
        self.base_file_name = ""
        self.base_class_name = ""
        if "_impl" in xml_name:
            self.base_file_name = self.file_name[:-4]
        if "Impl" in self.class_name:
            self.base_class_name = self.class_name[:-4]
        self.sub_class_name = ""
        self.sub_class_column_name = ""
        self.sub_class_column_member_count = 0
        self.member_name = ""
        self.member_count = 0
        self.key_types: list[str] = []
        self.key_names: list[str] = []

    def _sed(self, edit_type: EditType, pattern: str, new_str: str = "") -> None:
        sed(self.gen_path, edit_type, pattern, new_str)

    def replace(self) -> None:
        """Fill the name markers of the generated file."""
        self._sed(EditType.SUBSTITUTE, "%%def_name%%", self.def_name)
        self._sed(EditType.SUBSTITUTE, "%%class_name%%", self.class_name)
        self._sed(EditType.SUBSTITUTE, "%%file_name%%", self.file_name)
        self._sed(EditType.SUBSTITUTE, "%%base_class_name%%", self.base_class_name)
        self._sed(EditType.SUBSTITUTE, "%%base_file_name%%", self.base_file_name)

    def gen0(self, struct_name: str) -> None:
        """Start a new sheet."""
        self.sub_class_name = self.class_name + to_class_name(struct_name)
        self.member_name = "m_" + to_file_name(struct_name) + "_container"
        self.key_types = []
        self.key_names = []
        self.member_count = 0

    def gen1(self, member_name: str) -> None:
        """Record one column of the current sheet."""
        self.sub_class_column_name = self.sub_class_name + to_class_name(member_name)
        self.sub_class_column_member_count = 0
        if _INDEX_KEY.search(member_name):
            self.key_types.append(VECTOR_KEY)
            self.key_names.append(member_name)
        elif _MAP_KEY.search(member_name):
            self.key_types.append(MAP_KEY)
            self.key_names.append(member_name)
        elif _RANDOM_KEY.search(member_name):
            self.key_types.append(RANDOM_KEY)
            self.key_names.append(member_name)
        else:
            match = _PARAMETER_COUNT.search(member_name)
            if match:
                self.sub_class_column_member_count = int(match.group(1))
        self.member_count += 1

    def gen2(self) -> None:
        """Finish the current sheet."""

    def delete(self) -> None:
        """Drop the lines still holding unused markers."""
        for marker in ("getfunc_name", "getfunc_container", "initfunc_name", "cross_instance"):
            self._sed(EditType.DELETE, f"%%{marker}%%")

    def calc_type(self, name: str) -> CalcTypeResult:
        """Choose the member type for column *name*."""
        result = CalcTypeResult(type_name="int", variable_name=name)
        if _REWARD_ITEM.search(name):
            result.need_init = False
            result.type_name = "std::vector<ItemConfigData>"
        elif _DROP.search(name):
            result.need_init = False
            result.type_name = "std::vector<UInt16>"
        elif _AREA.search(name):
            result.need_init = False
            result.type_name = "PointConfig"
        elif _ITEM_ID.search(name):
            result.type_name = "ItemID"
        elif match := _ATTR.search(name):
            result.need_init = False
            if match.group(0) != "attr_type_0":
                result.need_declare = False
            else:
                result.variable_name = "attr_vec"
            result.type_name = "std::vector<AttrCommonConfig::AttrPair>"
        elif _STR.search(name):
            result.need_init = False
            result.type_name = "std::string"
        elif _WEIGHT_LIST.search(name):
            result.need_init = False
            result.type_name = "lmb::RandomVector<int, int>"
        elif _PARAMETER_LIST.search(name):
            result.need_init = False
            result.type_name = "std::vector<" + self.sub_class_column_name + ">"
        elif _PARAMETER.search(name):
            result.need_init = False
            result.type_name = self.sub_class_column_name
        elif match := _SEPARATED.search(name):
            result.need_init = False
            if match.group(0) in ("_comma", "_pipe"):
                result.type_name = "std::vector<int>"
            else:
                result.type_name = "std::vector<std::vector<int>>"
        return result

    def calc_dynamic_type(self, index: int) -> str:
        """Container type nesting the keys from *index* on around the sheet struct."""
        keys = self.key_types[index:]
        return "".join(keys) + self.sub_class_name + ">" * len(keys)

    def map_to_pair(self, type_str: str) -> str:
        """Turn a ``std::map<...>`` type into the matching ``std::pair<...>``."""
        if len(type_str) < 5:
            raise ValueError(f"type too short to be a map: {type_str!r}")
        return type_str[:5] + "pair" + type_str[8:]