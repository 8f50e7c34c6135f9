from rakitpc.builder.compatibility import check_compatibility, check_selection, extract_socket


def test_extract_socket_tokens():
    assert extract_socket("Socket LGA1700, 24 Cores") == "LGA1700"
    assert extract_socket("lga 1151 socket") == "lga 1151"
    assert extract_socket("Socket AM5, 8 Cores") == "AM5"
    assert extract_socket("360mm AIO") is None
    assert extract_socket("") is None
    assert extract_socket(None) is None


def test_compatibility_detects_socket_mismatch(make_component):
    cpu = make_component("CPU", 1, "Intel Core i9", specs="Socket LGA1700")
    board = make_component("Motherboard", 1, "B650", specs="Socket AM5, DDR5")

    issues = check_compatibility(cpu, board)

    assert issues == ["Socket mismatch: CPU (LGA1700) vs Motherboard (AM5)"]


def test_same_socket_ignoring_whitespace_and_case(make_component):
    cpu = make_component("CPU", 1, specs="Socket LGA 1700")
    board = make_component("Motherboard", 1, specs="lga1700, DDR5")

    assert check_compatibility(cpu, board) == []


def test_missing_pick_or_token_is_not_a_conflict(make_component):
    cpu = make_component("CPU", 1, specs="Socket AM5")
    board_without_token = make_component("Motherboard", 1, specs="DDR5, WiFi 6E")

    assert check_compatibility(None, None) == []
    assert check_compatibility(cpu, None) == []
    assert check_compatibility(None, board_without_token) == []
    assert check_compatibility(cpu, board_without_token) == []


def test_check_selection_reads_cpu_and_motherboard(make_component):
    selection = {
        "CPU": make_component("CPU", 1, specs="AM4"),
        "Motherboard": make_component("Motherboard", 1, specs="AM5"),
        "GPU": None,
    }

    assert len(check_selection(selection)) == 1
    assert check_selection({}) == []
