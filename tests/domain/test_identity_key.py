from schedule_checker.domain.keys import comparable, make_identity_key


def test_identity_key_concatenates_lowercased_fields_without_whitespace():
    key = make_identity_key("Monday", "7:30 AM", "Studio Barre 57", "Anisha Shah", "Kenkere House")

    assert key == "monday7:30amstudiobarre57anishashahkenkerehouse"


def test_identity_key_ignores_whitespace_and_case():
    plain = make_identity_key("Monday", "7:30 AM", "Studio Barre 57", "Anisha Shah", "Kenkere House")
    noisy = make_identity_key("  MONDAY ", "7:30\tam", "studio  BARRE 57", "anisha\nshah", "KENKERE   house")

    assert plain == noisy


def test_identity_key_distinguishes_different_fields():
    monday = make_identity_key("Monday", "7:30 AM", "Studio Barre 57", "Anisha Shah", "Kenkere House")
    tuesday = make_identity_key("Tuesday", "7:30 AM", "Studio Barre 57", "Anisha Shah", "Kenkere House")

    assert monday != tuesday


def test_comparable_handles_empty_values():
    assert comparable("") == ""
    assert comparable(None) == ""
