import threading
import time

from yamf.utils.rwlock import ReadWriteLock


def test_readers_share_the_lock():
    lock = ReadWriteLock()
    inside = threading.Barrier(3, timeout=5)

    def reader():
        with lock.read_locked():
            # all three readers must be inside at the same time to pass the barrier
            inside.wait()

    threads = [threading.Thread(target=reader) for _ in range(3)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert lock.readers == 0


def test_writer_is_exclusive():
    lock = ReadWriteLock()
    active = []
    overlaps = []

    def writer():
        for _ in range(100):
            with lock.write_locked():
                active.append(1)
                if len(active) > 1:
                    overlaps.append(len(active))
                active.pop()

    threads = [threading.Thread(target=writer) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert overlaps == []


def test_waiting_writer_blocks_new_readers():
    lock = ReadWriteLock()
    order = []
    lock.acquire_read()

    def writer():
        with lock.write_locked():
            order.append('writer')

    def reader():
        with lock.read_locked():
            order.append('reader')

    writer_thread = threading.Thread(target=writer)
    writer_thread.start()
    while not lock._writers_waiting:
        time.sleep(0.001)

    reader_thread = threading.Thread(target=reader)
    reader_thread.start()
    time.sleep(0.05)
    assert order == []

    lock.release_read()
    writer_thread.join()
    reader_thread.join()
    assert order == ['writer', 'reader']
