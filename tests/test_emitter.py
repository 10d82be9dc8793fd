import pytest

from typesafe_emitter import NodeEventEmitter, Symbol


def test_unregistered_event_is_empty(emitter: NodeEventEmitter):
    assert emitter.emit("nothing", 1, 2) is False
    assert emitter.listener_count("nothing") == 0
    assert emitter.listeners("nothing") == []
    assert emitter.event_names() == []


def test_on_registers_listener(emitter: NodeEventEmitter):
    def f():
        pass

    assert emitter.on("e", f) is emitter
    assert emitter.listener_count("e") == 1
    assert emitter.listeners("e") == [f]
    assert emitter.event_names() == ["e"]


def test_emit_calls_listener_synchronously_with_args(emitter: NodeEventEmitter):
    calls = []
    emitter.on("e", lambda a, b: calls.append((a, b)))

    assert emitter.emit("e", 1, "two") is True
    assert calls == [(1, "two")]


def test_emit_forwards_keyword_arguments(emitter: NodeEventEmitter):
    calls = []
    emitter.on("e", lambda value, *, scale=1: calls.append(value * scale))

    emitter.emit("e", 2, scale=10)
    assert calls == [20]


def test_login_listeners_run_in_registration_order(emitter: NodeEventEmitter):
    calls = []

    def f(user):
        calls.append(("f", user))

    def g(user):
        calls.append(("g", user))

    emitter.on("login", f).on("login", g)

    assert emitter.emit("login", "alice") is True
    assert calls == [("f", "alice"), ("g", "alice")]


def test_same_listener_twice_runs_twice_and_off_removes_both(emitter: NodeEventEmitter):
    calls = []

    def f():
        calls.append("f")

    emitter.on("e", f)
    emitter.on("e", f)
    emitter.emit("e")
    assert calls == ["f", "f"]

    assert emitter.off("e", f) is emitter
    assert emitter.listener_count("e") == 0
    assert emitter.emit("e") is False
    assert calls == ["f", "f"]


def test_off_keeps_other_listeners(emitter: NodeEventEmitter):
    def f():
        pass

    def g():
        pass

    emitter.on("e", f).on("e", g).on("e", f)
    emitter.off("e", f)
    assert emitter.listeners("e") == [g]


def test_off_unknown_event_or_listener_is_noop(emitter: NodeEventEmitter):
    def f():
        pass

    def g():
        pass

    assert emitter.off("missing", f) is emitter
    emitter.on("e", g)
    emitter.off("e", f)
    assert emitter.listeners("e") == [g]


def test_off_matches_bound_methods_by_equality(emitter: NodeEventEmitter):
    class Counter:
        def __init__(self):
            self.hits = 0

        def hit(self):
            self.hits += 1

    counter = Counter()
    emitter.on("e", counter.hit)
    emitter.off("e", counter.hit)
    assert emitter.emit("e") is False
    assert counter.hits == 0


def test_remove_listener_is_alias_of_off(emitter: NodeEventEmitter):
    def f():
        pass

    emitter.on("e", f)
    assert emitter.remove_listener("e", f) is emitter
    assert emitter.listener_count("e") == 0

    emitter.on("e", f)
    emitter.removeListener("e", f)
    assert emitter.listenerCount("e") == 0


def test_removing_last_listener_drops_event(emitter: NodeEventEmitter):
    def f():
        pass

    emitter.on("e", f)
    emitter.off("e", f)
    assert emitter.event_names() == []


def test_remove_all_listeners_without_event_clears_everything(emitter: NodeEventEmitter):
    emitter.on("a", print).on("b", print)

    assert emitter.remove_all_listeners() is emitter
    assert emitter.event_names() == []
    assert emitter.emit("a") is False


def test_remove_all_listeners_for_one_event(emitter: NodeEventEmitter):
    calls = []
    emitter.on("a", lambda: calls.append("a")).on("a", lambda: calls.append("a2"))
    emitter.on("b", lambda: calls.append("b"))

    emitter.remove_all_listeners("a")

    assert emitter.listener_count("a") == 0
    assert emitter.event_names() == ["b"]
    emitter.emit("b")
    assert calls == ["b"]


def test_remove_all_listeners_accepts_falsy_event(emitter: NodeEventEmitter):
    emitter.on("", print).on("other", print)
    emitter.remove_all_listeners("")
    assert emitter.event_names() == ["other"]


def test_event_names_in_first_registration_order(emitter: NodeEventEmitter):
    ready = Symbol("ready")
    emitter.on("b", print).on(ready, print).on("a", print).on("b", len)
    assert emitter.event_names() == ["b", ready, "a"]
    assert emitter.eventNames() == ["b", ready, "a"]


def test_symbol_keys_are_distinct_from_strings_and_each_other(emitter: NodeEventEmitter):
    calls = []
    first = Symbol("ready")
    second = Symbol("ready")
    emitter.on(first, lambda: calls.append("first"))
    emitter.on("ready", lambda: calls.append("string"))

    assert emitter.emit(second) is False
    emitter.emit(first)
    assert calls == ["first"]
    assert repr(first) == "Symbol('ready')"


def test_listeners_returns_a_copy(emitter: NodeEventEmitter):
    emitter.on("e", print)
    listeners = emitter.listeners("e")
    listeners.append(len)
    assert emitter.listeners("e") == [print]


def test_raw_listeners_matches_listeners(emitter: NodeEventEmitter):
    def f():
        pass

    def g():
        pass

    emitter.on("e", f).once("e", g)
    assert emitter.raw_listeners("e") == [f, g]
    assert emitter.rawListeners("e") == emitter.listeners("e")


def test_listener_added_during_emit_waits_for_next_emit(emitter: NodeEventEmitter):
    calls = []

    def late():
        calls.append("late")

    def adder():
        calls.append("adder")
        emitter.on("e", late)

    emitter.on("e", adder)
    emitter.emit("e")
    assert calls == ["adder"]

    emitter.off("e", adder)
    emitter.emit("e")
    assert calls == ["adder", "late"]


def test_listener_removed_during_emit_still_runs_that_emit(emitter: NodeEventEmitter):
    calls = []

    def victim():
        calls.append("victim")

    def remover():
        calls.append("remover")
        emitter.off("e", victim)

    emitter.on("e", remover).on("e", victim)

    emitter.emit("e")
    assert calls == ["remover", "victim"]

    emitter.emit("e")
    assert calls == ["remover", "victim", "remover"]


def test_listener_exception_propagates_and_skips_later_listeners(emitter: NodeEventEmitter):
    calls = []

    def boom():
        raise RuntimeError("boom")

    emitter.on("e", lambda: calls.append("before")).on("e", boom).on("e", lambda: calls.append("after"))

    with pytest.raises(RuntimeError, match="boom"):
        emitter.emit("e")
    assert calls == ["before"]
    assert emitter.listener_count("e") == 3


def test_listener_return_values_are_ignored(emitter: NodeEventEmitter):
    emitter.on("e", lambda: False)
    assert emitter.emit("e") is True


def test_add_listener_alias(emitter: NodeEventEmitter):
    def f():
        pass

    emitter.add_listener("e", f).addListener("e", f)
    assert emitter.listeners("e") == [f, f]
