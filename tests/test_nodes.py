import pytest

from courier_bt.behavior.nodes import (
    Action, Composite, Condition, Selector, Sequence, render_tree,
)


def recorder(calls, label, result):
    def leaf():
        calls.append(label)
        return result
    leaf.__name__ = label
    return leaf


class TestLeaves:

    def test_condition_returns_predicate_result(self):
        assert Condition(lambda: True).evaluate() is True
        assert Condition(lambda: False).evaluate() is False

    def test_truthy_results_are_coerced(self):
        assert Condition(lambda: 1).evaluate() is True
        assert Action(lambda: None).evaluate() is False

    def test_action_runs_operation_every_time(self):
        calls = []
        node = Action(recorder(calls, 'act', True))
        node.evaluate()
        node.evaluate()
        assert calls == ['act', 'act']

    def test_name_defaults_to_callable_name(self):
        def is_ready():
            return True
        assert Condition(is_ready).name == 'is_ready'
        assert Action(is_ready, name='go').name == 'go'

    def test_exceptions_propagate(self):
        def broken():
            raise RuntimeError("boom")
        with pytest.raises(RuntimeError, match="boom"):
            Action(broken).evaluate()


class TestSequence:

    def test_all_succeed(self):
        calls = []
        node = Sequence([Action(recorder(calls, 'a', True)),
                         Action(recorder(calls, 'b', True))])
        assert node.evaluate() is True
        assert calls == ['a', 'b']

    def test_stops_at_first_failure(self):
        calls = []
        node = Sequence([Condition(recorder(calls, 'guard', False)),
                         Action(recorder(calls, 'act', True))])
        assert node.evaluate() is False
        assert calls == ['guard']

    def test_empty_sequence_succeeds(self):
        assert Sequence().evaluate() is True


class TestSelector:

    def test_stops_at_first_success(self):
        calls = []
        node = Selector([Action(recorder(calls, 'a', False)),
                         Action(recorder(calls, 'b', True)),
                         Action(recorder(calls, 'c', True))])
        assert node.evaluate() is True
        assert calls == ['a', 'b']

    def test_all_fail(self):
        calls = []
        node = Selector([Action(recorder(calls, 'a', False)),
                         Action(recorder(calls, 'b', False))])
        assert node.evaluate() is False
        assert calls == ['a', 'b']

    def test_empty_selector_fails(self):
        assert Selector().evaluate() is False

    def test_failed_branch_side_effects_are_kept(self):
        # No rollback: a partially run sequence keeps what it did.
        calls = []
        node = Selector([
            Sequence([Action(recorder(calls, 'turn', True)),
                      Action(recorder(calls, 'move', False))]),
            Action(recorder(calls, 'fallback', True)),
        ])
        assert node.evaluate() is True
        assert calls == ['turn', 'move', 'fallback']


class TestComposite:

    def test_children_are_a_fixed_tuple(self):
        children = [Condition(lambda: True)]
        node = Sequence(children)
        children.append(Condition(lambda: False))
        assert isinstance(node.children, tuple)
        assert len(node) == 1
        assert node.evaluate() is True

    def test_iterates_children_in_order(self):
        a, b = Condition(lambda: True, 'a'), Condition(lambda: True, 'b')
        node = Selector([a, b])
        assert list(node) == [a, b]
        assert isinstance(node, Composite)

    def test_nodes_hold_no_state_between_evaluations(self):
        flag = {'value': False}
        node = Selector([Condition(lambda: flag['value'])])
        assert node.evaluate() is False
        flag['value'] = True
        assert node.evaluate() is True
        flag['value'] = False
        assert node.evaluate() is False


def test_render_tree_outline():
    tree = Selector([
        Sequence([Condition(lambda: True, 'ready'), Action(lambda: True, 'go')],
                 name='branch'),
    ], name='root')
    assert render_tree(tree) == (
        "Selector: root\n"
        "  Sequence: branch\n"
        "    Condition: ready\n"
        "    Action: go"
    )
