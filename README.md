# cfggen

`cfggen` writes C++ config loader classes from XML config tables, one
class per XML file. Each class gets a generated `.h`/`.cpp` pair, rewritten
on every run, and an `impl` `.h`/`.cpp` pair, written once and then left
alone so that hand-written checks can go there.

## Installing

```
pip install .
```

## Usage

```
cfggen XML_PATH CPP_PATH [COMPARE_TIME]
```

- `XML_PATH` is searched recursively for `*.xml` files. It must also hold
  the four templates `template_config.h`, `template_config.cpp`,
  `inherit_config.h` and `inherit_config.cpp`; if one is missing the
  command prints the error and exits with status 1.
- `CPP_PATH` receives the output. An XML file `my_table.xml` gives a
  directory `CPP_PATH/mytable/` holding `mytable.h`, `mytable.cpp`,
  `mytableimpl.h` and `mytableimpl.cpp`. Existing `impl` files are never
  overwritten.
- `COMPARE_TIME` (optional, default `1`) is read as an integer. When it is
  non-zero, a table is skipped if its generated sources are at least as new
  as the XML file; when it is `0`, every table is regenerated.

With fewer than two arguments the command prints a usage message and exits
with status 1.

## How the XML is read

Each child of the document element is a sheet. The distinct child element
names of a sheet's first row are its columns, and the name of each column
chooses its C++ member type and loader code. The first rule that matches
wins:

| column name contains                   | generated member                          |
|----------------------------------------|-------------------------------------------|
| `reward_item`                          | `std::vector<ItemConfigData>`             |
| `drop`                                 | `std::vector<UInt16>`                     |
| `area`                                 | `PointConfig`                             |
| `item_id`, `stuff_id`, `equip_id`      | `ItemID`                                  |
| `attr_type_<n>`, `attr_value_<n>`      | one `std::vector<AttrCommonConfig::AttrPair> attr_vec` |
| `str`                                  | `std::string`                             |
| `weight_list`                          | `lmb::RandomVector<int, int>`             |
| `_<n>parameter_list`                   | a vector of a struct with `n` `param_*` fields |
| `_<n>parameter`                        | a struct with `n` `param_*` fields        |
| `_comma` / `_pipe`                     | `std::vector<int>`                        |
| `_comma_pipe` / `_pipe_comma`          | `std::vector<std::vector<int>>`           |
| anything else                          | `int`                                     |

Columns whose names contain `index`, `key`, `_range`, `_rrange` or `rand`
become container keys (vector, map, range lookup or weighted random pick),
and a getter function is generated for each key depth.

## Using it from Python

```python
from cfggen.build import compare_files_time

generated = compare_files_time("config", "gen", True)
```

`compare_files_time` returns the paths of the files it generated and raises
`FileNotFoundError` when a template is missing. Lower-level pieces:

- `cfggen.build.get_files_time` maps file stems to `FileData` entries
  (path and last write time).
- `cfggen.genconfig.gen(xml_path, gen_path, xml_name)` fills one copy of a
  template in place from one XML file; it raises `GenerateError` when a file
  is missing, the XML cannot be parsed, or the target is not `.h`/`.cpp`.
- `cfggen.genhead.GenHead` and `cfggen.gencpp.GenCpp` produce the header
  and source contents.
- `cfggen.sed.sed` and `cfggen.sed.edit_lines` perform the line edits named
  by `EditType` (`a`, `O`, `i`, `s`, `d`).

## What it does not do

The generated C++ refers to types and helpers (`ConfigBase`,
`PugiXmlNode`, `ItemConfigData`, `lmb::RandomVector` and others) that this
package does not provide, and it is neither compiled nor checked here.