from reahl.tofu import NoException
from reahl.tofu import expected

from reahl.sawfish.solidworks import serialize
from reahl.sawfish.solidworks.results import MAXIMUM_ARRAY_DEPTH
from reahl.sawfish.solidworks.results import OPAQUE_HANDLE_NOTE
from reahl.sawfish.solidworks.results import ResultKind

from fake_solidworks import FakeDispatchWrapper
from fake_solidworks import FakeOleObject


class PyIDispatch:
    pass


def test_primitives_are_returned_as_they_are():
    assert serialize(None) is None
    assert serialize(True) is True
    assert serialize(42) == 42
    assert serialize(2.5) == 2.5
    assert serialize('Part1') == 'Part1'


def test_non_finite_numbers_are_described_textually():
    assert serialize(float('nan')) == {'kind': 'float', 'value': 'nan'}
    assert serialize(float('inf')) == {'kind': 'float', 'value': 'inf'}
    assert ResultKind.of(float('-inf')) is ResultKind.NON_FINITE_NUMBER


def test_live_objects_are_described_and_never_traversed():
    sketch_segment = FakeDispatchWrapper('ISketchSegment', FakeOleObject())

    assert serialize(sketch_segment) == {
        'kind': 'ISketchSegment',
        'note': OPAQUE_HANDLE_NOTE,
    }
    assert sketch_segment.__dict__['_oleobj_'].invocations == []


def test_raw_dispatch_pointers_are_opaque_handles():
    assert ResultKind.of(PyIDispatch()) is ResultKind.OPAQUE_HANDLE
    assert serialize(PyIDispatch())['kind'] == 'PyIDispatch'


def test_arrays_show_length_and_at_most_ten_values():
    serialized_array = serialize(tuple(range(25)))

    assert serialized_array == {
        'kind': 'array',
        'length': 25,
        'values': list(range(10)),
    }


def test_array_elements_are_serialized_recursively():
    sketch_segment = FakeDispatchWrapper('ISketchSegment', FakeOleObject())

    serialized_array = serialize([1.5, [2, 3], sketch_segment])

    assert serialized_array['values'][0] == 1.5
    assert serialized_array['values'][1] == {
        'kind': 'array',
        'length': 2,
        'values': [2, 3],
    }
    assert serialized_array['values'][2]['kind'] == 'ISketchSegment'


def test_deeply_nested_arrays_are_cut_off():
    nested = []
    innermost = nested
    for _ in range(MAXIMUM_ARRAY_DEPTH + 3):
        child = []
        innermost.append(child)
        innermost = child

    serialized_array = serialize(nested)
    for _ in range(MAXIMUM_ARRAY_DEPTH):
        serialized_array = serialized_array['values'][0]

    assert serialized_array == {
        'kind': 'array',
        'length': 1,
        'note': 'nested too deeply',
    }


def test_other_values_are_described_by_type_and_text():
    class Colour:
        def __str__(self):
            return 'red'

    assert serialize(Colour()) == {'kind': 'Colour', 'value': 'red'}
    assert serialize({'a': 1}) == {'kind': 'dict', 'value': "{'a': 1}"}


def test_serialization_never_raises():
    class Unprintable:
        def __str__(self):
            raise RuntimeError('no text')

        def __repr__(self):
            raise RuntimeError('no repr')

    class BrokenSequence(list):
        def __len__(self):
            raise RuntimeError('length unavailable')

        def __repr__(self):
            return 'BrokenSequence'

    with expected(NoException):
        unprintable = serialize(Unprintable())
        broken_sequence = serialize(BrokenSequence())

    assert unprintable == {'kind': 'Unprintable', 'value': '<unprintable>'}
    assert broken_sequence['kind'] == 'BrokenSequence'
