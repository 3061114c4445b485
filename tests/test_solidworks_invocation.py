import sys
import types
from unittest.mock import patch

from reahl.tofu import Fixture
from reahl.tofu import expected
from reahl.tofu import with_fixtures

from reahl.sawfish.solidworks import InvocationFailure
from reahl.sawfish.solidworks import MethodInvoker
from reahl.sawfish.solidworks import MissingParameter
from reahl.sawfish.solidworks import PropertyAccessor
from reahl.sawfish.solidworks.com import DISPATCH_METHOD
from reahl.sawfish.solidworks.com import DISPATCH_PROPERTYGET
from reahl.sawfish.solidworks.invocation import Attempted
from reahl.sawfish.solidworks.invocation import GenericMemberInvocation
from reahl.sawfish.solidworks.invocation import IntrospectiveMethodMatch
from reahl.sawfish.solidworks.invocation import PropertyGetterFallback
from reahl.sawfish.solidworks.invocation import public_method_candidates
from reahl.sawfish.solidworks.invocation import Skipped

from fake_solidworks import FakeDocument
from fake_solidworks import FakeSketchManager


class CountingTarget:
    def __init__(self):
        self.calls = []

    def Explode(self):
        self.calls.append('Explode')
        raise ValueError('rebuild failed')

    def SelectByNames(self, *names):
        self.calls.append(names)
        return len(names)

    def Offset(self, Distance: float, Reverse: bool = False, *, Flip=False):
        return (Distance, Reverse, Flip)


class InvocationFixture(Fixture):
    def new_invoker(self):
        return MethodInvoker()

    def new_sketch_manager(self):
        return FakeSketchManager()

    def new_document(self):
        return FakeDocument()

    def new_feature_manager(self):
        return self.document.FeatureManager

    def new_feature_manager_ole_object(self):
        return self.feature_manager.__dict__['_oleobj_']


@with_fixtures(InvocationFixture)
def test_matching_method_is_called_with_coerced_arguments(invocation_fixture):
    result = invocation_fixture.invoker.invoke(
        invocation_fixture.sketch_manager,
        'CreateLine',
        {'x1': 0, 'y1': 0, 'z1': 0, 'x2': 1, 'y2': 0, 'z2': 0},
    )

    assert result is True
    [created_line] = invocation_fixture.sketch_manager.created_lines
    assert created_line == (0.0, 0.0, 0.0, 1.0, 0.0, 0.0)
    assert all(isinstance(coordinate, float) for coordinate in created_line)


@with_fixtures(InvocationFixture)
def test_method_names_match_case_insensitively(invocation_fixture):
    result = invocation_fixture.invoker.invoke(
        invocation_fixture.sketch_manager,
        'createline',
        {'X1': 0, 'Y1': 0, 'Z1': 0, 'X2': 1, 'Y2': 1, 'Z2': 0},
    )
    assert result is True


@with_fixtures(InvocationFixture)
def test_optional_parameters_may_be_omitted(invocation_fixture):
    invoker = invocation_fixture.invoker
    target = CountingTarget()
    assert invoker.invoke(target, 'Offset', {'Distance': 2}) == (2.0, False, False)
    assert invoker.invoke(
        target,
        'Offset',
        {'distance': 2, 'reverse': True, 'flip': True},
    ) == (2.0, True, True)


@with_fixtures(InvocationFixture)
def test_missing_required_parameter_is_named(invocation_fixture):
    with expected(MissingParameter):
        invocation_fixture.invoker.invoke(
            invocation_fixture.sketch_manager,
            'CreateLine',
            {'x1': 0, 'y1': 0, 'z1': 0, 'x2': 1, 'y2': 0, 'depth': 0},
        )
    assert not invocation_fixture.sketch_manager.created_lines


@with_fixtures(InvocationFixture)
def test_unused_arguments_go_to_variable_positionals(invocation_fixture):
    target = CountingTarget()
    assert invocation_fixture.invoker.invoke(
        target,
        'SelectByNames',
        {'first': 'Front Plane', 'second': 'Top Plane'},
    ) == 2
    assert target.calls == [('Front Plane', 'Top Plane')]


@with_fixtures(InvocationFixture)
def test_failure_of_the_chosen_method_is_not_retried(invocation_fixture):
    target = CountingTarget()

    with expected(InvocationFailure):
        invocation_fixture.invoker.invoke(target, 'Explode', {})

    assert target.calls == ['Explode']


@with_fixtures(InvocationFixture)
def test_chosen_method_failure_reports_method_and_cause(invocation_fixture):
    try:
        invocation_fixture.invoker.invoke(CountingTarget(), 'Explode', {})
    except InvocationFailure as error:
        assert str(error) == "Method 'Explode' failed on interface CountingTarget."
        assert error.diagnostic_detail == 'ValueError: rebuild failed'
    else:
        raise AssertionError('InvocationFailure was not raised')


@with_fixtures(InvocationFixture)
def test_late_bound_call_is_used_when_no_method_is_visible(invocation_fixture):
    result = invocation_fixture.invoker.invoke(
        invocation_fixture.feature_manager,
        'FeatureExtrusion2',
        {'sd': True, 'flip': False, 'dir': False},
    )

    assert result == 3
    [invocation] = invocation_fixture.feature_manager_ole_object.invocations
    assert invocation == ('FeatureExtrusion2', DISPATCH_METHOD, (True, False, False))


@with_fixtures(InvocationFixture)
def test_property_getter_is_the_last_resort_without_arguments(invocation_fixture):
    result = invocation_fixture.invoker.invoke(
        invocation_fixture.feature_manager,
        'EnableFeatureTree',
    )

    assert result is True
    invocations = invocation_fixture.feature_manager_ole_object.invocations
    assert [kind for _, kind, _ in invocations] == [
        DISPATCH_METHOD,
        DISPATCH_PROPERTYGET,
    ]


@with_fixtures(InvocationFixture)
def test_exhausted_tiers_give_one_synthesized_failure(invocation_fixture):
    try:
        invocation_fixture.invoker.invoke(
            invocation_fixture.sketch_manager,
            'CreateLine',
            {'x1': 0, 'y1': 0},
        )
    except InvocationFailure as error:
        assert str(error) == (
            "Method 'CreateLine' could not be invoked on interface "
            'FakeSketchManager. This may be a COM interop issue or the '
            'method does not exist. Attempted with 2 parameter(s).'
        )
        assert 'introspective method match' in error.diagnostic_detail
        assert 'generic member invocation' in error.diagnostic_detail
        assert 'property getter fallback' in error.diagnostic_detail
    else:
        raise AssertionError('InvocationFailure was not raised')


@with_fixtures(InvocationFixture)
def test_unknown_member_of_a_late_bound_object_fails(invocation_fixture):
    with expected(InvocationFailure):
        invocation_fixture.invoker.invoke(
            invocation_fixture.feature_manager,
            'NoSuchMethod',
            {},
        )


def test_tiers_report_whether_they_attempted():
    target = CountingTarget()
    assert isinstance(
        IntrospectiveMethodMatch().attempt(target, 'Missing', {}),
        Skipped,
    )
    assert isinstance(
        PropertyGetterFallback().attempt(target, 'calls', {'a': 1}),
        Skipped,
    )
    attempt = GenericMemberInvocation().attempt(target, 'selectbynames', {'a': 1})
    assert isinstance(attempt, Attempted)
    assert attempt.value == 1


def test_custom_tier_order_is_honoured():
    class AlwaysAnswers:
        name = 'always answers'

        def attempt(self, target, member_name, arguments):
            return Attempted('answered %s' % member_name)

    invoker = MethodInvoker(tiers=[AlwaysAnswers(), IntrospectiveMethodMatch()])
    assert invoker.invoke(CountingTarget(), 'Explode') == 'answered Explode'


class PropertyFixture(Fixture):
    def new_accessor(self):
        return PropertyAccessor()

    def new_document(self):
        return FakeDocument()

    def new_feature_manager(self):
        return self.document.FeatureManager


@with_fixtures(PropertyFixture)
def test_python_property_is_read_and_written(property_fixture):
    accessor = property_fixture.accessor
    document = property_fixture.document

    assert accessor.get_property(document, 'visible') is True
    assert accessor.set_property(document, 'Visible', False) is False
    assert document.visible is False


@with_fixtures(PropertyFixture)
def test_late_bound_property_is_read_and_written(property_fixture):
    accessor = property_fixture.accessor
    feature_manager = property_fixture.feature_manager

    assert accessor.get_property(feature_manager, 'EnableFeatureTree') is True
    assert accessor.set_property(feature_manager, 'EnableFeatureTree', False) is False
    assert accessor.get_property(feature_manager, 'EnableFeatureTree') is False


@with_fixtures(PropertyFixture)
def test_unknown_property_fails_with_interface_name(property_fixture):
    try:
        property_fixture.accessor.get_property(
            property_fixture.feature_manager,
            'NoSuchProperty',
        )
    except InvocationFailure as error:
        assert str(error) == (
            "Failed to get property 'NoSuchProperty' on interface IFeatureManager."
        )
        assert 'generic property access' in error.diagnostic_detail
    else:
        raise AssertionError('InvocationFailure was not raised')


def test_generated_wrapper_properties_are_found_in_property_maps():
    class GeneratedDocument:
        _prop_map_get_ = {'Visible': (1, 2, (11, 0), (), 'Visible', None)}
        _prop_map_put_ = {'Visible': ((1, 0), ())}

        def __init__(self):
            self.__dict__['applied'] = {}

        def __getattr__(self, name):
            if name == 'Visible':
                return self.applied.get('Visible', True)
            raise AttributeError(name)

        def __setattr__(self, name, value):
            self.applied[name] = value

    document = GeneratedDocument()
    accessor = PropertyAccessor()

    assert accessor.get_property(document, 'visible') is True
    assert accessor.set_property(document, 'visible', False) is False
    assert document.applied == {'Visible': False}


def test_failing_property_getter_is_not_retried():
    reads = []

    class FlakyDocument:
        @property
        def Title(self):
            reads.append('Title')
            raise RuntimeError('document closed')

    with expected(InvocationFailure):
        PropertyAccessor().get_property(FlakyDocument(), 'Title')
    assert reads == ['Title']


class GeneratedModuleFixture(Fixture):
    def new_required_marker(self):
        return object()

    def new_generated_module(self):
        generated_module = types.ModuleType('sawfish_generated_sketch_module')
        generated_module.defaultNamedNotOptArg = self.required_marker
        return generated_module

    def new_sketch_manager(self):
        required_marker = self.required_marker

        class GeneratedSketchManager:
            def CreateCircleByRadius(
                self,
                Xc=required_marker,
                Yc=required_marker,
                Zc=required_marker,
                Radius=required_marker,
            ):
                return (Xc, Yc, Zc, Radius)

        GeneratedSketchManager.CreateCircleByRadius.__module__ = (
            self.generated_module.__name__
        )
        return GeneratedSketchManager()

    def generated_modules_loaded(self):
        return patch.dict(
            sys.modules,
            {self.generated_module.__name__: self.generated_module},
        )


@with_fixtures(GeneratedModuleFixture)
def test_generated_wrapper_defaults_count_as_required(generated_module_fixture):
    with generated_module_fixture.generated_modules_loaded():
        [candidate] = public_method_candidates(
            generated_module_fixture.sketch_manager,
            'CreateCircleByRadius',
        )

    assert candidate.required_count == 4
    assert candidate.total_count == 4
    assert not candidate.accepts_argument_count(2)


@with_fixtures(GeneratedModuleFixture)
def test_short_calls_on_generated_wrappers_go_late_bound(generated_module_fixture):
    sketch_manager = generated_module_fixture.sketch_manager
    with generated_module_fixture.generated_modules_loaded():
        skipped = IntrospectiveMethodMatch().attempt(
            sketch_manager,
            'CreateCircleByRadius',
            {'Xc': 0, 'Yc': 0},
        )
        result = MethodInvoker().invoke(
            sketch_manager,
            'CreateCircleByRadius',
            {'Xc': 0, 'Yc': 0},
        )
        complete_result = MethodInvoker().invoke(
            sketch_manager,
            'CreateCircleByRadius',
            {'Xc': 0, 'Yc': 0, 'Zc': 0, 'Radius': 0.01},
        )

    assert not skipped.is_attempted
    assert result[:2] == (0, 0)
    assert result[2] is generated_module_fixture.required_marker
    assert complete_result == (0, 0, 0, 0.01)
