import support  # noqa: F401


def test_can_import_all_protocols():
    # Import must succeed and expose the expected names
    import filemerge.core.interfaces as I

    assert hasattr(I, "LanguageProfileProtocol")
    assert hasattr(I, "WatchBackendProtocol")
    assert hasattr(I, "EventSink")


def test_backends_satisfy_watch_protocol():
    from filemerge.core.interfaces import WatchBackendProtocol
    from filemerge.watching import NullWatchBackend, WatchdogBackend

    assert isinstance(NullWatchBackend(), WatchBackendProtocol)
    assert isinstance(WatchdogBackend(), WatchBackendProtocol)


def test_package_exports():
    import filemerge

    for name in filemerge.__all__:
        assert hasattr(filemerge, name), name
    assert filemerge.__version__
