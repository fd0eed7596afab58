"""Service layer entrypoints with lazy imports."""


def compute_profile(*args, **kwargs):
    from .profile_service import compute_profile as _compute_profile

    return _compute_profile(*args, **kwargs)


def prepare_test_record(*args, **kwargs):
    from .test_record_service import prepare_test_record as _prepare_test_record

    return _prepare_test_record(*args, **kwargs)


__all__ = ["compute_profile", "prepare_test_record"]
