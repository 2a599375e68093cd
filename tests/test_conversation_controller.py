import asyncio

from gemini_chat.core.conversation_controller import ConversationController, FailurePolicy, TurnOutcome
from gemini_chat.core.state_store import ChatStateStore
from gemini_chat.models.turn import ERROR_MARKER, Role, Turn

from tests.fakes import BlockingGenerator, StubGenerator


def _controller(client, **kw):
    ctrl = ConversationController(client, **kw)
    if isinstance(client, StubGenerator):
        client.observer = ctrl
    return ctrl


def test_success_appends_user_then_model():
    client = StubGenerator("¡hola! ¿en qué puedo ayudarte?")
    ctrl = _controller(client)

    outcome = asyncio.run(ctrl.submit_turn("hola"))

    assert outcome == TurnOutcome.ANSWERED
    assert ctrl.history == (Turn.user("hola"), Turn.model("¡hola! ¿en qué puedo ayudarte?"))
    assert ctrl.snapshot().display_lines() == ["🧑‍💻: hola", "🤖: ¡hola! ¿en qué puedo ayudarte?"]
    assert client.payloads == ["\n🧑‍💻: hola"]
    assert ctrl.is_loading is False


def test_empty_response_uses_placeholder():
    ctrl = _controller(StubGenerator(""))

    outcome = asyncio.run(ctrl.submit_turn("ping"))

    assert outcome == TurnOutcome.EMPTY_RESPONSE
    assert [t.role for t in ctrl.history] == [Role.USER, Role.MODEL]
    assert ctrl.history[1].display == "🤖: No se recibió respuesta"


def test_failure_appends_only_error_marker():
    store = ChatStateStore()
    store.append(Turn.user("a"), Turn.model("b"))
    client = StubGenerator(error=RuntimeError("boom"))
    ctrl = _controller(client, store=store)

    outcome = asyncio.run(ctrl.submit_turn("x"))

    assert outcome == TurnOutcome.FAILED
    assert ctrl.history == (Turn.user("a"), Turn.model("b"), Turn.error())
    assert ctrl.history[-1].display == ERROR_MARKER
    assert ctrl.is_loading is False
    # user may submit again right away
    client.error = None
    client.replies = ["again"]
    assert asyncio.run(ctrl.submit_turn("y")) == TurnOutcome.ANSWERED


def test_keep_prompt_policy_records_prompt_before_error():
    ctrl = _controller(StubGenerator(error=RuntimeError("boom")), failure_policy=FailurePolicy.KEEP_PROMPT)

    asyncio.run(ctrl.submit_turn("x"))

    assert ctrl.history == (Turn.user("x"), Turn.error())


def test_loading_flag_true_only_during_call():
    ok = StubGenerator("r")
    ctrl = _controller(ok)
    asyncio.run(ctrl.submit_turn("p"))
    assert ok.seen_loading == [True]
    assert ctrl.is_loading is False

    bad = StubGenerator(error=ValueError("nope"))
    ctrl = _controller(bad)
    asyncio.run(ctrl.submit_turn("p"))
    assert bad.seen_loading == [True]
    assert ctrl.is_loading is False


def test_submit_while_loading_is_a_noop():
    async def scenario():
        client = BlockingGenerator(reply="first")
        ctrl = ConversationController(client)
        first = asyncio.create_task(ctrl.submit_turn("one"))
        await asyncio.sleep(0)
        assert ctrl.is_loading is True

        before = ctrl.snapshot()
        assert await ctrl.submit_turn("two") == TurnOutcome.DROPPED
        assert ctrl.snapshot() == before
        assert client.calls == 1

        client.release()
        assert await first == TurnOutcome.ANSWERED
        return ctrl

    ctrl = asyncio.run(scenario())
    assert [t.text for t in ctrl.history] == ["one", "first"]


def test_start_turn_schedules_once():
    async def scenario():
        client = BlockingGenerator()
        ctrl = ConversationController(client)
        task = ctrl.start_turn("hi")
        assert task is not None
        await asyncio.sleep(0)
        assert ctrl.start_turn("again") is None
        client.release()
        return await task

    assert asyncio.run(scenario()) == TurnOutcome.ANSWERED


def test_full_history_is_resent_every_turn():
    replies = ["r1", "r2", "r3"]
    client = StubGenerator(*replies, "r4")
    ctrl = _controller(client)

    async def scenario():
        for i in range(3):
            await ctrl.submit_turn(f"p{i}")
        await ctrl.submit_turn("last")

    asyncio.run(scenario())

    expected_prior = ["🧑‍💻: p0", "🤖: r1", "🧑‍💻: p1", "🤖: r2", "🧑‍💻: p2", "🤖: r3"]
    assert client.payloads[-1] == "\n".join(expected_prior) + "\n🧑‍💻: last"
    assert len(ctrl.history) == 8


def test_timeout_is_reported_as_failure():
    async def scenario():
        ctrl = ConversationController(BlockingGenerator(), timeout_seconds=0.01)
        outcome = await ctrl.submit_turn("slow")
        return ctrl, outcome

    ctrl, outcome = asyncio.run(scenario())
    assert outcome == TurnOutcome.FAILED
    assert ctrl.history == (Turn.error(),)
    assert ctrl.is_loading is False


def test_blank_prompt_is_accepted():
    client = StubGenerator("eh?")
    ctrl = _controller(client)

    asyncio.run(ctrl.submit_turn("   "))

    assert ctrl.history[0] == Turn.user("   ")
    assert len(client.payloads) == 1


def test_subscribers_see_loading_then_result():
    ctrl = _controller(StubGenerator("r"))
    seen = []
    ctrl.subscribe(lambda s: seen.append((len(s.history), s.is_loading)))

    asyncio.run(ctrl.submit_turn("p"))

    assert seen == [(0, True), (2, True), (2, False)]
