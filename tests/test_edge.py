from esynth.edge import EdgeAggregator, EdgeAnnotation


def test_default_annotation_is_active_and_unjustified():
    ann = EdgeAnnotation()
    assert ann.is_active() is True
    assert ann.justification == ""


def test_inactive_annotation():
    ann = EdgeAnnotation("merge", False)
    assert ann.is_active() is False
    assert ann.justification == "merge"


def test_int_activity_is_converted():
    assert EdgeAnnotation("x", 0).is_active() is False
    assert EdgeAnnotation("x", 1).is_active() is True


def test_aggregator_holds_values():
    ann = EdgeAnnotation("link", True)
    agg = EdgeAggregator([1, 2, 3], "molecule", ann)
    assert agg.antecedent == [1, 2, 3]
    assert agg.consequent == "molecule"
    assert agg.annotation is ann


def test_aggregator_default_antecedents_are_independent():
    a = EdgeAggregator()
    b = EdgeAggregator()
    a.antecedent.append(1)
    assert b.antecedent == []