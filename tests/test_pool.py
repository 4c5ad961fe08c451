import threading

from swiftlog.buffer.pool import Pool


def test_buffers_concurrent():
    dummy = "dummy data"
    pool = Pool()
    results = []
    lock = threading.Lock()

    def worker():
        for _ in range(100):
            buf = pool.get()
            length_after_get = len(buf)
            capacity = buf.capacity()
            buf.append_string(dummy)
            length_after_append = len(buf)
            buf.free()
            with lock:
                results.append((length_after_get, capacity > 0, length_after_append))

    threads = [threading.Thread(target=worker) for _ in range(10)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(results) == 1000
    assert set(results) == {(0, True, len(dummy))}

    buf = pool.get()
    assert len(buf) == 0
    assert buf.capacity() > 0
    buf.append_string(dummy)
    assert len(buf) == len(dummy)
    assert bytes(buf.to_bytes()) == dummy.encode()
    buf.free()


def test_freed_buffer_is_reused_empty():
    pool = Pool()
    buf = pool.get()
    buf.append_string("leftover")
    buf.free()
    again = pool.get()
    assert again is buf
    assert len(again) == 0


def test_put_accepts_buffer():
    pool = Pool()
    first = pool.get()
    second = pool.get()
    assert first is not second
    pool.put(second)
    assert pool.get() is second