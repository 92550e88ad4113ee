from sctpwire.control_queue import ControlQueue
from sctpwire.packet import Packet


def test_new_queue_is_empty():
    q = ControlQueue()
    assert len(q) == 0
    assert q.pop_all() == []


def test_push_and_pop_all_keeps_order():
    q = ControlQueue()
    a = Packet(verification_tag=1)
    b = Packet(verification_tag=2)
    q.push(a)
    q.push(b)
    assert len(q) == 2
    popped = q.pop_all()
    assert [p.verification_tag for p in popped] == [1, 2]
    assert len(q) == 0


def test_push_all_appends_after_existing():
    q = ControlQueue()
    first = Packet(source_port=10)
    q.push(first)
    rest = [Packet(source_port=11), Packet(source_port=12)]
    q.push_all(rest)
    assert len(q) == 3
    assert [p.source_port for p in q.pop_all()] == [10, 11, 12]


def test_pop_all_empties_queue():
    q = ControlQueue()
    q.push_all([Packet(), Packet()])
    q.pop_all()
    assert q.pop_all() == []
    assert len(q) == 0