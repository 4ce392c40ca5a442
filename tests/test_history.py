from gallery_client.history import DetailView, HistoryStack


def test_mobile_open_pushes_entry_and_close_pops_it():
    history = HistoryStack()
    closed = []
    view = DetailView(history, viewport_width=400, on_close=closed.append)

    view.open({"_id": "p1"})
    assert len(history) == 2
    assert history.state == {"dialog": True}

    view.close()
    assert len(history) == 1
    assert not view.is_open
    assert closed == [{"_id": "p1"}]


def test_back_gesture_closes_view_without_leaving_gallery():
    history = HistoryStack()
    history.push_state({"page": "gallery"})
    view = DetailView(history, viewport_width=400)

    view.open({"_id": "p1"})
    history.back()

    assert not view.is_open
    assert history.state == {"page": "gallery"}
    assert len(history) == 2

    # closing again is a no-op and does not pop the gallery entry
    view.close()
    assert len(history) == 2


def test_desktop_never_touches_history():
    history = HistoryStack()
    view = DetailView(history, viewport_width=1280)

    view.open({"_id": "p1"})
    assert len(history) == 1
    view.close()
    assert len(history) == 1
    assert not view.is_open


def test_switching_item_while_open_keeps_one_entry():
    history = HistoryStack()
    view = DetailView(history, viewport_width=400)

    view.open({"_id": "p1"})
    view.open({"_id": "p2"})

    assert len(history) == 2
    assert view.item == {"_id": "p2"}
    view.close()
    assert len(history) == 1
