import pytest

from cfggen.gencpp import GenCpp

TEMPLATE = """%%include itempool%%
%%include attribute%%
%%include droppool%%
#include "%%file_name%%.h"
//%%cross_instance%%
bool %%class_name%%::Init()
{
//%%load_config%%
}
//%%getfunc_name%%
//%%getfunc_container%%
//%%initfunc_name%%
"""


def run(tmp_path, columns, sheet="other", xml_name="test_cfg"):
    path = tmp_path / "testcfg.cpp"
    path.write_text(TEMPLATE, encoding="utf-8")
    gen = GenCpp(path, xml_name)
    gen.replace()
    gen.gen0(sheet)
    for column in columns:
        gen.gen1(column)
    gen.gen2()
    gen.delete()
    return path.read_text(encoding="utf-8")


def test_names_replaced_and_markers_removed(tmp_path):
    text = run(tmp_path, ["level"])
    assert '#include "testcfg.h"' in text
    assert "bool TestCfg::Init()" in text
    assert "%%" not in text


def test_sheet_without_keys(tmp_path):
    text = run(tmp_path, ["level"])
    assert '\tPUGI_XML_LOAD_CONFIG("other", InitTestCfgOther);' in text
    assert "int TestCfg::InitTestCfgOther(PugiXmlNode RootElement)" in text
    assert "\t\tTestCfgOther cfg;" in text
    assert "\t\ttmp_container = cfg;" in text
    assert "\t\tbreak;" in text
    assert "\tm_other_container = std::move(tmp_container);" in text
    assert "const TestCfgOther& TestCfg::GetTestCfgOther()" in text
    assert '!PugiGetSubNodeValue(dataElement, "level", cfg.level) || cfg.level < 0' in text


def test_index_key_getters(tmp_path):
    text = run(tmp_path, ["seq_index", "level"])
    assert "const std::vector<TestCfgOther>& TestCfg::GetTestCfgOtherContainer()" in text
    assert "const TestCfgOther* TestCfg::GetTestCfgOther1(int seq_index)" in text
    assert "\treturn &container_1;" in text
    assert "\t\tauto& container_0 = tmp_container;" in text
    assert "\t\tbreak;" not in text


def test_two_keys_getter_order(tmp_path):
    text = run(tmp_path, ["seq_index", "key", "level"])
    get2 = "TestCfg::GetTestCfgOther2(int seq_index, int key)"
    get1 = "TestCfg::GetTestCfgOther1(int seq_index)"
    assert get2 in text
    assert get1 in text
    assert text.index(get2) < text.index(get1)
    assert "\tauto map_it_1 = container_1.find(key);" in text


def test_item_id_includes_itempool(tmp_path):
    text = run(tmp_path, ["item_id"])
    assert '#include "item/itempool.h"' in text
    assert "nullptr == ITEMPOOL->GetItem(cfg.item_id)" in text
    assert "droppool" not in text


def test_reward_item_list_strips_suffix(tmp_path):
    text = run(tmp_path, ["reward_item_list"])
    assert (
        'ItemConfigData::ReadConfigList(dataElement, "reward_item", cfg.reward_item_list)'
        in text
    )


def test_drop_includes_droppool(tmp_path):
    text = run(tmp_path, ["drop_id"])
    assert '#include "monster/drop/droppool.hpp"' in text
    assert 'DROPPOOL->ReadDropConfig(dataElement, "drop_id", cfg.drop_id)' in text


@pytest.mark.parametrize(
    "column, call",
    [
        ("cost_comma", 'this->ReadList(dataElement, "cost_comma", cfg.cost_comma, ",")'),
        ("cost_pipe", 'this->ReadList(dataElement, "cost_pipe", cfg.cost_pipe, "|")'),
        (
            "cost_pipe_comma",
            'this->ReadListInList(dataElement, "cost_pipe_comma", cfg.cost_pipe_comma, "|", ",")',
        ),
        (
            "cost_comma_pipe",
            'this->ReadListInList(dataElement, "cost_comma_pipe", cfg.cost_comma_pipe, ",", "|")',
        ),
    ],
)
def test_separated_lists(tmp_path, column, call):
    assert call in run(tmp_path, [column])


def test_parameter_fills_params(tmp_path):
    text = run(tmp_path, ["cond_2parameter"])
    assert "\t\t\tcfg.cond_2parameter.param_0 = cond_2parameter_vec[0];" in text
    assert "\t\t\tcfg.cond_2parameter.param_1 = cond_2parameter_vec[1];" in text
    assert "param_2" not in text


def test_range_key_uses_lower_bound(tmp_path):
    text = run(tmp_path, ["level_range", "value"])
    assert "std::lower_bound(container_0.rbegin(), container_0.rend(), level_range" in text
    assert "std::pair<int, TestCfgOther>& element" in text
    assert "\t\tauto& container_1 = container_0[cfg.level_range];" in text


def test_rand_exclude_key(tmp_path):
    text = run(tmp_path, ["rand_exclude", "value"])
    assert "container_0.RandomValueExclude(0 != rand_exclude)" in text
    assert "\t\t\tcontainer_0.push_back(cfg.rand_exclude, tmp);" in text