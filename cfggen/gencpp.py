"""Generation of the C++ source of a config loader."""

from __future__ import annotations

import os
import re

from cfggen.genbase import MAP_KEY, RANDOM_KEY, VECTOR_KEY, GenBase, to_file_name
from cfggen.sed import EditType

__all__ = ["GenCpp"]

_REWARD_ITEM = re.compile(r"reward_*item")
_DROP = re.compile(r"drop")
_AREA = re.compile(r"area")
_ITEM_ID = re.compile(r"item_*id|stuff_*id|equip_*id")
_ATTR = re.compile(r"attr_type_\d|attr_value_\d")
_WEIGHT_LIST = re.compile(r"weight_list")
_STR = re.compile(r"str")
_SEPARATED = re.compile(r"(_comma_pipe)|(_pipe_comma)|(_comma)|(_pipe)")
_NEGATIVE = re.compile(r"negative")
_PARAMETER_LIST = re.compile(r"_\d+parameter_list")
_PARAMETER = re.compile(r"_\d+parameter")

_KEY = re.compile(r"key")
_RANGE = re.compile(r"_range")
_RRANGE = re.compile(r"_rrange")
_RAND_EXCLUDE = re.compile(r"rand_exclude")
_RAND = re.compile(r"rand")

_ITEMPOOL_INCLUDE = '#include "item/itempool.h"'
_DROPPOOL_INCLUDE = '#include "monster/drop/droppool.hpp"'
_ATTRIBUTE_INCLUDE = '#include "obj/character/attribute.hpp"'


def _fail_block(condition: str, code: str, indent: str = "\t\t") -> str:
    return (
        f"{indent}if ({condition})\n"
        f"{indent}{{\n"
        f"{indent}\treturn {code};\n"
        f"{indent}}}\n"
    )


class GenCpp(GenBase):
    """Fills a source template with load calls, init and getter functions."""

    def __init__(self, gen_path: str | os.PathLike, xml_name: str) -> None:
        super().__init__(gen_path, xml_name)

    def replace(self) -> None:
        super().replace()

    def _content(self, text: str) -> None:
        self._sed(EditType.INSERT, "%%initfunc_content%%", text)

    def gen0(self, struct_name: str) -> None:
        super().gen0(struct_name)
        sub = self.sub_class_name
        self._sed(
            EditType.INSERT,
            "%%load_config%%",
            f'\tPUGI_XML_LOAD_CONFIG("{struct_name}", Init{sub});',
        )
        init_func = (
            f"int {self.class_name}::Init{sub}(PugiXmlNode RootElement)\n"
            "{\n"
            f"\tdecltype({self.member_name}) tmp_container;\n"
            '\tPugiXmlNode dataElement = RootElement.child("data");\n'
            "\twhile (!dataElement.empty())\n"
            "\t{\n"
            "//%%initfunc_def_cfg%%\n"
            "//%%initfunc_content%%\n"
            "\t}\n"
            "%%initfunc_end%%\n"
            "\treturn 0;\n"
            "}"
        )
        self._sed(EditType.INSERT, "%%initfunc_name%%", init_func)

    def gen1(self, member_name: str) -> None:
        super().gen1(member_name)
        name = member_name
        count = str(self.member_count)
        ret_fail = _fail_block(f"{name}_ret < 0", f"-{count}000 + {name}_ret")

        if _REWARD_ITEM.search(name):
            read_str = name
            if any(c in read_str for c in "_list"):
                read_str = read_str[:-5]
            text = (
                f"\t\tint {name}_ret = ItemConfigData::ReadConfigList(dataElement, "
                f'"{read_str}", cfg.{name});\n'
            )
            self._sed(EditType.SUBSTITUTE, "%%include itempool%%", _ITEMPOOL_INCLUDE)
            self._content(text + ret_fail)
        elif _DROP.search(name):
            text = (
                f"\t\tint {name}_ret = DROPPOOL->ReadDropConfig(dataElement, "
                f'"{name}", cfg.{name});\n'
            )
            self._content(text + ret_fail)
            self._sed(EditType.SUBSTITUTE, "%%include droppool%%", _DROPPOOL_INCLUDE)
        elif _AREA.search(name):
            text = (
                f'\t\tbool {name}_ret = cfg.{name}.ReadConfig(dataElement, "{name}");\n'
                + _fail_block(f"!{name}_ret", f"-{count}000")
            )
            self._content(text)
        elif _ITEM_ID.search(name):
            condition = (
                f'!PugiGetSubNodeValue(dataElement, "{name}", cfg.{name}) '
                f"|| nullptr == ITEMPOOL->GetItem(cfg.{name})"
            )
            self._sed(EditType.SUBSTITUTE, "%%include itempool%%", _ITEMPOOL_INCLUDE)
            self._content(_fail_block(condition, f"-{count}"))
        elif _ATTR.search(name):
            if name == "attr_type_0":
                text = (
                    f"\t\tint {name}_ret = CharIntAttrs::ReadAttrTypeAndValue("
                    'dataElement, "attr", cfg.attr_vec);\n'
                )
                self._content(text + ret_fail)
                self._sed(
                    EditType.SUBSTITUTE, "%%include attribute%%", _ATTRIBUTE_INCLUDE
                )
        elif _WEIGHT_LIST.search(name):
            text = (
                f"\t\tstd::string {name}_str;\n"
                + _fail_block(
                    f'!PugiGetSubNodeValue(dataElement, "{name}", {name}_str) '
                    f"|| {name}_str.empty()",
                    f"-{count}",
                )
                + f'\t\tstd::vector<int>{name}_vec = SplitStringInt({name}_str, ",");\n'
                + f"\t\tcfg.{name}.push_back({name}_vec);\n"
            )
            self._content(text)
        elif _STR.search(name):
            self._content(
                _fail_block(
                    f'!PugiGetSubNodeValue(dataElement, "{name}", cfg.{name})', f"-{count}"
                )
            )
        elif match := _SEPARATED.search(name):
            text = ""
            if match.group(0) == "_comma":
                text = (
                    f"\t\tint {name}_ret = this->ReadList(dataElement, "
                    f'"{name}", cfg.{name}, ",");\n'
                )
            elif match.group(0) == "_pipe":
                text = (
                    f"\t\tint {name}_ret = this->ReadList(dataElement, "
                    f'"{name}", cfg.{name}, "|");\n'
                )
            elif match.group(1) == "_comma_pipe":
                text = (
                    f"\t\tint {name}_ret = this->ReadListInList(dataElement, "
                    f'"{name}", cfg.{name}, ",", "|");\n'
                )
            elif match.group(2) == "_pipe_comma":
                text = (
                    f"\t\tint {name}_ret = this->ReadListInList(dataElement, "
                    f'"{name}", cfg.{name}, "|", ",");\n'
                )
            self._content(text + ret_fail)
        elif _NEGATIVE.search(name):
            self._content(
                _fail_block(
                    f'!PugiGetSubNodeValue(dataElement, "{name}", cfg.{name})', f"-{count}"
                )
            )
        elif _PARAMETER_LIST.search(name):
            self._content(self._parameter_list_block(name, count))
        elif _PARAMETER.search(name):
            self._content(self._parameter_block(name, count))
        else:
            self._content(
                _fail_block(
                    f'!PugiGetSubNodeValue(dataElement, "{name}", cfg.{name}) '
                    f"|| cfg.{name} < 0",
                    f"-{count}",
                )
            )

    def _parameter_list_block(self, name: str, count: str) -> str:
        column_type = self.sub_class_column_name
        var = to_file_name(column_type)
        size = self.sub_class_column_member_count
        parts = [
            "\t\t{\n",
            f"\t\t\tstd::string {name}_str;\n",
            f'\t\t\tPugiGetSubNodeValue(dataElement, "{name}", {name}_str);\n',
            f'\t\t\tstd::vector<std::string> {name}_vec = SplitString({name}_str, ",");\n',
            f"\t\t\tfor (const std::string& {name} : {name}_vec)\n",
            "\t\t\t{\n",
            f"\t\t\t\t{column_type} {var};\n",
            f'\t\t\t\tstd::vector<int> {name}_sub_vec = SplitStringInt({name}, ":");\n',
            _fail_block(f"(int){name}_sub_vec.size() != {size}", f"-{count}", "\t\t\t\t"),
        ]
        parts.extend(
            f"\t\t\t\t{var}.param_{i} = {name}_sub_vec[{i}];\n" for i in range(size)
        )
        parts.append(f"\t\t\t\tcfg.{name}.push_back({var});\n")
        parts.append("\t\t\t}\n")
        parts.append("\t\t}\n")
        return "".join(parts)

    def _parameter_block(self, name: str, count: str) -> str:
        size = self.sub_class_column_member_count
        parts = [
            "\t\t{\n",
            f"\t\t\tstd::string {name}_str;\n",
            f'\t\t\tPugiGetSubNodeValue(dataElement, "{name}", {name}_str);\n',
            f'\t\t\tstd::vector<int> {name}_vec = SplitStringInt({name}_str, ":");\n',
            _fail_block(f"(int){name}_vec.size() != {size}", f"-{count}", "\t\t\t"),
        ]
        parts.extend(f"\t\t\tcfg.{name}.param_{i} = {name}_vec[{i}];\n" for i in range(size))
        parts.append("\t\t}\n")
        return "".join(parts)

    def gen2(self) -> None:
        super().gen2()
        self._gen_getters()
        self._gen_init_function()

    def _gen_getters(self) -> None:
        cls = self.class_name
        sub = self.sub_class_name
        container = self.calc_dynamic_type(0)
        if self.key_types:
            self._sed(
                EditType.INSERT,
                "%%getfunc_container%%",
                f"const {container}& {cls}::Get{sub}Container()\n"
                "{\n"
                f"\treturn {self.member_name};\n"
                "}\n",
            )
        else:
            self._sed(
                EditType.INSERT,
                "%%getfunc_name%%",
                f"const {container}& {cls}::Get{sub}()\n"
                "{\n"
                f"\treturn {self.member_name};\n"
                "}\n",
            )

        key_count = min(len(self.key_types), len(self.key_names))
        for i in range(key_count):
            depth = len(self.key_names) - i
            self._sed(
                EditType.INSERT,
                "%%getfunc_name%%",
                f"const {self.calc_dynamic_type(depth)}* {cls}::Get{sub}{depth}"
                "(%%getfunc_args%%)\n"
                "{\n"
                "//%%getfunc_content%%\n"
                "}\n",
            )
            self._sed(
                EditType.INSERT,
                "%%getfunc_content%%",
                f"\tauto& container_0 = {self.member_name};",
            )
            for j, (key_type, key_name) in enumerate(
                zip(self.key_types[: key_count - i], self.key_names[: key_count - i])
            ):
                text = self._getter_step(i, j, key_type, key_name)
                if text:
                    self._sed(EditType.INSERT, "%%getfunc_content%%", text)
                arg = (", " if j > 0 else "") + f"int {key_name}%%getfunc_args%%"
                self._sed(EditType.SUBSTITUTE, "%%getfunc_args%%", arg)
                if j + 1 == len(self.key_types) - i:
                    self._sed(
                        EditType.INSERT, "%%getfunc_content%%", f"\treturn &container_{j + 1};"
                    )
            self._sed(EditType.DELETE, "%%getfunc_content%%")
            self._sed(EditType.SUBSTITUTE, "%%getfunc_args%%", "")

    def _getter_step(self, i: int, j: int, key_type: str, key_name: str) -> str:
        cur = f"container_{j}"
        nxt = f"container_{j + 1}"
        not_found = "\t{\n\t\treturn nullptr;\n\t}\n"
        if "vector" in key_type:
            return (
                f"\tif ({key_name} < 0 || (size_t){key_name} >= {cur}.size())\n"
                + not_found
                + f"\tauto& {nxt} = {cur}[{key_name}];\n"
            )
        if "map" in key_type:
            if _KEY.search(key_name):
                return (
                    f"\tauto map_it_{j} = {cur}.find({key_name});\n"
                    f"\tif (map_it_{j} == {cur}.end())\n"
                    + not_found
                    + f"\tauto& {nxt} = map_it_{j}->second;\n"
                )
            pair = self.map_to_pair(self.calc_dynamic_type(i))
            if _RANGE.search(key_name):
                begin, end, op = "rbegin", "rend", ">"
            elif _RRANGE.search(key_name):
                begin, end, op = "begin", "end", "<"
            else:
                return ""
            return (
                f"\tauto map_it_{j} = std::lower_bound({cur}.{begin}(), {cur}.{end}(), "
                f"{key_name}, \n"
                f"\t\t[](const {pair}& element, int value)\n"
                "\t\t{\n"
                f"\t\t\treturn element.first {op} value;\n"
                "\t\t});\n"
                f"\tif (map_it_{j} == {cur}.{end}())\n"
                + not_found
                + f"\tauto& {nxt} = map_it_{j}->second;\n"
            )
        if "lmb::RandomVec" in key_type:
            if _RAND_EXCLUDE.search(key_name):
                call = f"RandomValueExclude(0 != {key_name})"
            elif _RAND.search(key_name):
                call = "RandomValue()"
            else:
                return ""
            return (
                f"\tauto* {nxt}_ptr = {cur}.{call};\n"
                f"\tif (nullptr == {nxt}_ptr)\n"
                + not_found
                + f"\tauto& {nxt} = *{nxt}_ptr;\n"
            )
        return ""

    def _gen_init_function(self) -> None:
        if self.member_count > 0:
            self._sed(
                EditType.INSERT, "%%initfunc_def_cfg%%", f"\t\t{self.sub_class_name} cfg;"
            )
        if self.key_names:
            self._content("\t\tauto& container_0 = tmp_container;")

        key_count = min(len(self.key_types), len(self.key_names))
        for i, (key_type, key_name) in enumerate(
            zip(self.key_types[:key_count], self.key_names[:key_count])
        ):
            cur = f"container_{i}"
            nxt = f"container_{i + 1}"
            if key_type == VECTOR_KEY or "vector" in key_type:
                self._content(
                    f"\t\tif ((size_t)cfg.{key_name} > {cur}.size())\n"
                    "\t\t{\n"
                    f"\t\t\treturn -{i + 1}0000;\n"
                    "\t\t}\n"
                    f"\t\telse if ((size_t)cfg.{key_name} == {cur}.size())\n"
                    "\t\t{\n"
                    f"\t\t\t{self.calc_dynamic_type(i + 1)} tmp;\n"
                    f"\t\t\t{cur}.push_back(tmp);\n"
                    "\t\t}\n"
                    f"\t\tif ((size_t)cfg.{key_name} >= {cur}.size())\n"
                    "\t\t{\n"
                    f"\t\t\treturn -{i + 1}0001;\n"
                    "\t\t}\n"
                    f"\t\tauto& {nxt} = {cur}[cfg.{key_name}];\n"
                )
            elif key_type == MAP_KEY or "map" in key_type:
                self._content(f"\t\tauto& {nxt} = {cur}[cfg.{key_name}];\n")
            elif key_type == RANDOM_KEY or "lmb::RandomVec" in key_type:
                self._content(
                    "\t\t{\n"
                    f"\t\t\t{self.calc_dynamic_type(i + 1)} tmp;\n"
                    f"\t\t\t{cur}.push_back(cfg.{key_name}, tmp);\n"
                    "\t\t}\n"
                    f"\t\tauto& {nxt} = {cur}.back();\n"
                )
            if i + 1 == len(self.key_types):
                self._content(
                    f"\t\t{nxt} = cfg;\n\n\t\tdataElement = dataElement.next_sibling();\n"
                )

        if not self.key_types:
            if self.member_count > 0:
                self._content("\t\ttmp_container = cfg;")
            self._content("\t\tbreak;")

        self._sed(
            EditType.INSERT,
            "%%initfunc_end%%",
            f"\t{self.member_name} = std::move(tmp_container);",
        )
        self._sed(EditType.DELETE, "%%initfunc_def_cfg%%")
        self._sed(EditType.DELETE, "%%initfunc_content%%")
        self._sed(EditType.DELETE, "%%initfunc_end%%")

    def delete(self) -> None:
        super().delete()
        for marker in (
            "load_config",
            "include itempool",
            "include attribute",
            "include droppool",
        ):
            self._sed(EditType.DELETE, f"%%{marker}%%")