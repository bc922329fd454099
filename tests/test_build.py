import os
import time
from pathlib import Path

import pytest

from cfggen.build import FileData, compare_files_time, get_files_time

TEMPLATES = {
    "template_config.h": (
        "#ifndef __%%def_name%%_H__\n"
        "class %%class_name%%\n"
        "//%%struct_name%%\n"
        "//%%member_name%%\n"
        "//%%getfunc_name%%\n"
        "//%%getfunc_container%%\n"
        "//%%initfunc_name%%\n"
    ),
    "template_config.cpp": (
        '#include "%%file_name%%.h"\n'
        "//%%load_config%%\n"
        "//%%getfunc_name%%\n"
        "//%%getfunc_container%%\n"
        "//%%initfunc_name%%\n"
    ),
    "inherit_config.h": (
        '#include "%%base_file_name%%.h"\n'
        "class %%class_name%% : public %%base_class_name%%\n"
    ),
    "inherit_config.cpp": '#include "%%file_name%%.h"\n',
}

WORKBOOK = "<config><other><data><hp>1</hp></data></other></config>"


def _make_project(tmp_path: Path, with_templates: bool = True):
    xml_dir = tmp_path / "xml"
    cpp_dir = tmp_path / "cpp"
    xml_dir.mkdir()
    if with_templates:
        for name, text in TEMPLATES.items():
            (xml_dir / name).write_text(text, encoding="utf-8")
    xml_file = xml_dir / "monster_cfg.xml"
    xml_file.write_text(WORKBOOK, encoding="utf-8")
    os.utime(xml_file, (1000, 1000))
    return xml_dir, cpp_dir, xml_file


def test_get_files_time_filters_and_recurses(tmp_path):
    (tmp_path / "sub").mkdir()
    (tmp_path / "a.xml").write_text("x", encoding="utf-8")
    (tmp_path / "sub" / "b.xml").write_text("x", encoding="utf-8")
    (tmp_path / "c.txt").write_text("x", encoding="utf-8")
    os.utime(tmp_path / "a.xml", (500, 500))
    files = get_files_time(tmp_path, r"\.xml")
    assert sorted(files) == ["a", "b"]
    assert files["a"] == FileData(str(tmp_path / "a.xml"), 500)


def test_get_files_time_keeps_oldest(tmp_path):
    (tmp_path / "sub").mkdir()
    older = tmp_path / "sub" / "a.h"
    newer = tmp_path / "a.cpp"
    older.write_text("x", encoding="utf-8")
    newer.write_text("x", encoding="utf-8")
    os.utime(older, (100, 100))
    os.utime(newer, (200, 200))
    files = get_files_time(tmp_path, r"\.(cpp|h)")
    assert files["a"].full_file_name == str(older)
    assert files["a"].last_write_time == 100


def test_get_files_time_without_compare_keeps_first(tmp_path):
    (tmp_path / "sub").mkdir()
    first = tmp_path / "a.cpp"
    second = tmp_path / "sub" / "a.h"
    first.write_text("x", encoding="utf-8")
    second.write_text("x", encoding="utf-8")
    os.utime(first, (200, 200))
    os.utime(second, (100, 100))
    files = get_files_time(tmp_path, r"\.(cpp|h)", False)
    assert files["a"].full_file_name == str(first)


def test_get_files_time_missing_dir(tmp_path):
    assert get_files_time(tmp_path / "nothing", r"\.xml") == {}


def test_compare_generates_all_files(tmp_path):
    xml_dir, cpp_dir, _ = _make_project(tmp_path)
    generated = compare_files_time(xml_dir, cpp_dir)
    gen_dir = cpp_dir / "monstercfg"
    expected = {
        gen_dir / "monstercfg.cpp",
        gen_dir / "monstercfg.h",
        gen_dir / "monstercfgimpl.cpp",
        gen_dir / "monstercfgimpl.h",
    }
    assert set(generated) == expected
    impl_header = (gen_dir / "monstercfgimpl.h").read_text(encoding="utf-8")
    assert impl_header == '#include "monstercfg.h"\nclass MonsterCfgImpl : public MonsterCfg\n'
    for path in expected:
        assert "%%" not in path.read_text(encoding="utf-8")


def test_compare_skips_up_to_date(tmp_path):
    xml_dir, cpp_dir, _ = _make_project(tmp_path)
    compare_files_time(xml_dir, cpp_dir)
    assert compare_files_time(xml_dir, cpp_dir) == []


def test_compare_without_time_regenerates(tmp_path):
    xml_dir, cpp_dir, _ = _make_project(tmp_path)
    compare_files_time(xml_dir, cpp_dir)
    header = cpp_dir / "monstercfg" / "monstercfg.h"
    header.write_text("stale\n", encoding="utf-8")
    regenerated = compare_files_time(xml_dir, cpp_dir, False)
    assert header in regenerated
    assert header.read_text(encoding="utf-8") != "stale\n"


def test_compare_keeps_existing_impl(tmp_path):
    xml_dir, cpp_dir, xml_file = _make_project(tmp_path)
    compare_files_time(xml_dir, cpp_dir)
    impl = cpp_dir / "monstercfg" / "monstercfgimpl.cpp"
    impl.write_text("custom\n", encoding="utf-8")
    future = time.time() + 1000
    os.utime(xml_file, (future, future))
    regenerated = compare_files_time(xml_dir, cpp_dir)
    assert impl not in regenerated
    assert cpp_dir / "monstercfg" / "monstercfg.cpp" in regenerated
    assert impl.read_text(encoding="utf-8") == "custom\n"


def test_compare_missing_templates(tmp_path):
    xml_dir, cpp_dir, _ = _make_project(tmp_path, with_templates=False)
    with pytest.raises(FileNotFoundError):
        compare_files_time(xml_dir, cpp_dir)