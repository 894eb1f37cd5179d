from scene_app.resources import AudioResourceManager


def test_acquire_writes_file(tmp_path):
    mgr = AudioResourceManager(tmp_path)
    handle = mgr.acquire(b"RIFFdata")

    assert handle.path.read_bytes() == b"RIFFdata"
    assert handle.size == 8
    assert mgr.count == 1
    assert mgr.open(handle.id) == b"RIFFdata"


def test_acquire_revokes_previous(tmp_path):
    mgr = AudioResourceManager(tmp_path)
    first = mgr.acquire(b"one")
    second = mgr.acquire(b"two")

    assert not first.path.exists()
    assert mgr.open(first.id) is None
    assert mgr.active == second
    assert mgr.count == 1
    assert list(tmp_path.iterdir()) == [second.path]


def test_release_is_idempotent(tmp_path):
    mgr = AudioResourceManager(tmp_path)
    handle = mgr.acquire(b"x")
    mgr.release(handle)
    mgr.release(handle)
    mgr.release(None)

    assert mgr.count == 0
    assert not handle.path.exists()


def test_release_of_stale_handle_keeps_current(tmp_path):
    mgr = AudioResourceManager(tmp_path)
    old = mgr.acquire(b"old")
    new = mgr.acquire(b"new")
    mgr.release(old)

    assert mgr.active == new
    assert new.path.exists()


def test_release_all_keeps_caller_directory(tmp_path):
    mgr = AudioResourceManager(tmp_path)
    handle = mgr.acquire(b"x")
    mgr.release_all()

    assert mgr.count == 0
    assert not handle.path.exists()
    assert tmp_path.exists()


def test_context_manager_removes_private_directory():
    with AudioResourceManager() as mgr:
        root = mgr.root
        mgr.acquire(b"x")
        assert root.exists()
    assert mgr.count == 0
    assert not root.exists()
