import pytest

from confdiff import CyclicInputError, DiffRecord, DiffStatus, diff_json, flatten, stringify, summarize


def test_identical_objects_report_unchanged():
    assert diff_json({"x": 1}, {"x": 1}) == [
        DiffRecord("x", DiffStatus.UNCHANGED, old_value="1", new_value="1")
    ]


def test_nested_change():
    assert diff_json({"a": {"b": 2}}, {"a": {"b": 1}}) == [
        DiffRecord("a.b", DiffStatus.CHANGED, old_value="1", new_value="2")
    ]


def test_added_and_removed_keys():
    added = diff_json({"a": 1, "b": 2}, {"a": 1})
    assert [r for r in added if r.status != DiffStatus.UNCHANGED] == [
        DiffRecord("b", DiffStatus.ADDED, new_value="2")
    ]
    removed = diff_json({"a": 1}, {"a": 1, "b": 2})
    assert removed[1] == DiffRecord("b", DiffStatus.REMOVED, old_value="2")
    assert removed[1].new_value is None


def test_scalars_collapse_to_root():
    assert diff_json(5, 5) == []
    assert diff_json(5, 6) == [DiffRecord("root", DiffStatus.CHANGED, old_value="6", new_value="5")]


def test_null_against_object_is_root_change():
    assert diff_json(None, {"a": 1}) == [
        DiffRecord("root", DiffStatus.CHANGED, old_value='{"a":1}', new_value="")
    ]


def test_differing_arrays_are_one_root_change():
    records = diff_json([1, 2], [1, 2, 3])
    assert records == [DiffRecord("root", DiffStatus.CHANGED, old_value="[1,2,3]", new_value="[1,2]")]


def test_array_leaf_serialized_as_json():
    assert diff_json({"a": [1, 2]}, {"a": [1, 2, 3]}) == [
        DiffRecord("a", DiffStatus.CHANGED, old_value="[1,2,3]", new_value="[1,2]")
    ]


def test_flatten_keeps_arrays_and_nulls_as_leaves():
    nested = {"a": {"b": {"c": 1}, "d": [1, {"e": 2}]}, "f": None}
    assert flatten(nested) == {"a.b.c": 1, "a.d": [1, {"e": 2}], "f": None}


def test_flatten_with_prefix():
    assert flatten({"x": {"y": True}}, "root") == {"root.x.y": True}


def test_empty_nested_object_produces_no_keys():
    assert flatten({"a": {}, "b": 1}) == {"b": 1}
    assert diff_json({"a": {}}, {}) == []


def test_stringify_rules():
    assert stringify(None) == ""
    assert stringify("plain text") == "plain text"
    assert stringify(True) == "true"
    assert stringify(False) == "false"
    assert stringify(3) == "3"
    assert stringify(1.0) == "1"
    assert stringify(1.5) == "1.5"
    assert stringify(float("nan")) == "NaN"
    assert stringify(float("-inf")) == "-Infinity"
    assert stringify([1, "a", None, True, 2.0]) == '[1,"a",null,true,2]'
    assert stringify((1, 2)) == "[1,2]"
    assert stringify(["é"]) == '["é"]'


def test_null_and_empty_string_are_equal_after_serialization():
    records = diff_json({"a": ""}, {"a": None})
    assert records == [DiffRecord("a", DiffStatus.UNCHANGED, old_value="", new_value="")]


def test_type_change_between_object_and_leaf():
    records = diff_json({"a": {"b": 1}}, {"a": 5})
    assert records == [
        DiffRecord("a", DiffStatus.REMOVED, old_value="5"),
        DiffRecord("a.b", DiffStatus.ADDED, new_value="1"),
    ]


def test_sort_is_collation_aware():
    data = {"b": 1, "A": 1, "a": 1, "é": 1, "f": 1}
    keys = [r.key for r in diff_json(data, data)]
    assert keys == ["a", "A", "b", "é", "f"]


def test_nested_keys_sort_with_siblings():
    keys = [r.key for r in diff_json({"a": {"b": 1, "c": 2}, "B": 3}, {})]
    assert keys == ["a.b", "a.c", "B"]


def test_reflexive_and_deterministic():
    data = {"s": "v", "n": {"m": [1, 2], "k": None}, "t": 2.5}
    first = diff_json(data, data)
    assert all(r.status == DiffStatus.UNCHANGED for r in first)
    assert diff_json(data, data) == first
    assert {r.key for r in first} == set(flatten(data))


def test_cyclic_input_raises():
    loop = {"a": 1}
    loop["self"] = loop
    with pytest.raises(CyclicInputError):
        diff_json(loop, {})
    arr = [1]
    arr.append(arr)
    with pytest.raises(ValueError):
        stringify(arr)


def test_shared_subobject_is_not_a_cycle():
    shared = {"x": 1}
    records = diff_json({"a": shared, "b": shared}, {})
    assert [r.key for r in records] == ["a.x", "b.x"]


def test_summarize_counts():
    records = diff_json({"a": 1, "b": 3, "c": 4}, {"a": 1, "b": 2, "d": 5})
    counts = summarize(records)
    assert counts[DiffStatus.ADDED] == 1
    assert counts[DiffStatus.REMOVED] == 1
    assert counts[DiffStatus.CHANGED] == 1
    assert counts[DiffStatus.UNCHANGED] == 1


def test_record_to_dict_omits_absent_side():
    record = DiffRecord("k", DiffStatus.ADDED, new_value="v")
    assert record.to_dict() == {"key": "k", "status": "ADDED", "newValue": "v"}


def test_number_text_follows_js_thresholds():
    assert stringify(0.00001) == "0.00001"
    assert stringify(-0.00001) == "-0.00001"
    assert stringify(0.1) == "0.1"
    assert stringify(1e-7) == "1e-7"
    assert stringify(1.5e-7) == "1.5e-7"
    assert stringify(100.0) == "100"
    assert stringify(1e20) == "100000000000000000000"
    assert stringify(1.2345678901234568e20) == "123456789012345680000"
    assert stringify(1e21) == "1e+21"
    assert stringify(2.5e25) == "2.5e+25"
    assert stringify(-0.0) == "0"
    assert stringify([0.00001, 1e21, float("inf")]) == "[0.00001,1e+21,null]"
    assert stringify({"lr": 3e-5}) == '{"lr":0.00003}'


def test_small_float_change_reported_in_decimal():
    records = diff_json({"lr": 0.00002}, {"lr": 0.00001})
    assert records == [DiffRecord("lr", DiffStatus.CHANGED, old_value="0.00001", new_value="0.00002")]


def test_non_string_keys_become_text():
    assert flatten({2: "a", None: "b", 1.5: {True: "c"}}) == {"2": "a", "null": "b", "1.5.true": "c"}
    assert stringify({1: [1]}) == '{"1":[1]}'


def test_colliding_keys_keep_last_value():
    # 1 与 "1" 展开后是同一个键，后出现的值生效，结果里只有一条记录
    records = diff_json({1: "a", "1": "b"}, {})
    assert records == [DiffRecord("1", DiffStatus.ADDED, new_value="b")]
