"""Generation of the C++ header of a config loader."""

from __future__ import annotations

import os

from cfggen.genbase import GenBase
from cfggen.sed import EditType

__all__ = ["GenHead"]


class GenHead(GenBase):
    """Fills a header template with structs, members and getter declarations."""

    def __init__(self, gen_path: str | os.PathLike, xml_name: str) -> None:
        super().__init__(gen_path, xml_name)
        self.need_init_count = 0

    def replace(self) -> None:
        super().replace()

    def gen0(self, struct_name: str) -> None:
        super().gen0(struct_name)
        self.need_init_count = 0
        sub = self.sub_class_name
        struct = (
            f"struct {sub}\n"
            "{\n"
            f"\t{sub}()\n"
            "\t\t:%%init_struct_head%%\n"
            "//%%init_struct_member%%\n"
            "\t{}\n"
            "//%%struct_member%%\n"
            "};"
        )
        self._sed(EditType.INSERT, "%%struct_name%%", struct)
        self._sed(
            EditType.INSERT,
            "%%initfunc_name%%",
            f"\tint Init{sub}(PugiXmlNode RootElement);",
        )

    def gen1(self, member_name: str) -> None:
        super().gen1(member_name)
        result = self.calc_type(member_name)
        if result.need_init:
            self._sed(EditType.SUBSTITUTE, "%%init_struct_comma%%", "")
            self._sed(
                EditType.INSERT,
                "%%init_struct_member%%",
                f"\t\t{member_name}(0),%%init_struct_comma%%",
            )
            self.need_init_count += 1

        if result.need_declare:
            variable = result.variable_name or member_name
            self._sed(
                EditType.INSERT, "%%struct_member%%", f"\t{result.type_name} {variable};"
            )

        if "reward_item" in member_name:
            self._sed(
                EditType.SUBSTITUTE,
                "%%include itemconfigdata%%",
                '#include "servercommon/struct/itemlistparam.h"',
            )
        elif any(word in member_name for word in ("weight_list", "rand_exclude", "rand")):
            self._sed(
                EditType.SUBSTITUTE,
                "%%include lmb_random%%",
                '#include "servercommon/utility/lmb_random.h"',
            )
        elif self._is_parameter(member_name):
            self._sed(EditType.INSERT, "%%struct_column_name%%", self._column_struct())

    @staticmethod
    def _is_parameter(member_name: str) -> bool:
        from cfggen.genbase import _PARAMETER

        return _PARAMETER.search(member_name) is not None

    def _column_struct(self) -> str:
        name = self.sub_class_column_name
        count = self.sub_class_column_member_count
        parts = [f"struct {name}\n", "{\n", f"\t{name}()\n", "\t\t:\n"]
        parts.extend(f"\t\tparam_{i}(0),\n" for i in range(count - 1))
        parts.append(f"\t\tparam_{count - 1}(0)\n")
        parts.append("\t{}\n")
        parts.extend(f"\tint param_{i};\n" for i in range(count))
        parts.append("};")
        return "".join(parts)

    def gen2(self) -> None:
        super().gen2()
        if self.need_init_count == 0:
            self._sed(EditType.DELETE, "%%init_struct_head%%")
        else:
            self._sed(EditType.SUBSTITUTE, "%%init_struct_head%%", "")
        self._sed(EditType.DELETE, "%%init_struct_member%%")
        self._sed(EditType.SUBSTITUTE, ",%%init_struct_comma%%", "")
        self._sed(EditType.DELETE, "%%struct_member%%")

        sub = self.sub_class_name
        container = self.calc_dynamic_type(0)
        self._sed(EditType.INSERT, "%%member_name%%", f"\t{container} {self.member_name};")

        if self.key_types:
            self._sed(
                EditType.INSERT,
                "%%getfunc_container%%",
                f"\tconst {container}& Get{sub}Container();",
            )
        else:
            self._sed(EditType.INSERT, "%%getfunc_name%%", f"\tconst {container}& Get{sub}();")

        key_count = len(self.key_names)
        for depth in range(key_count, 0, -1):
            args = ", ".join(f"int {key}" for key in self.key_names[:depth])
            self._sed(
                EditType.INSERT,
                "%%getfunc_name%%",
                f"\tconst {self.calc_dynamic_type(depth)}* Get{sub}{depth}({args});",
            )

        self._sed(EditType.INSERT, "%%getfunc_name%%", "")

    def delete(self) -> None:
        super().delete()
        for marker in (
            "struct_column_name",
            "struct_name",
            "member_name",
            "include itemconfigdata",
            "include lmb_random",
        ):
            self._sed(EditType.DELETE, f"%%{marker}%%")