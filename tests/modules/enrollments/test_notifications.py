# -*- coding: utf-8 -*-
from uuid import uuid4

import pytest

from app.modules.enrollments.notifications import (
    EnrollmentNotification,
    LoggingEnrollmentNotifier,
    dispatch_enrollment_notification,
)
from tests.fakes import RecordingNotifier


def _notification():
    return EnrollmentNotification(
        studio_id=uuid4(),
        program_id=uuid4(),
        enrollment_id=uuid4(),
        enrolled_user_id=uuid4(),
        profile_snapshot={"first_name": "Anna"},
        program_title="Hip hop kids",
    )


@pytest.mark.asyncio
async def test_dispatch_delivers():
    notifier = RecordingNotifier()
    notification = _notification()

    assert await dispatch_enrollment_notification(notifier, notification) is True
    assert notifier.sent == [notification]


@pytest.mark.asyncio
async def test_dispatch_swallows_failures(caplog):
    notifier = RecordingNotifier(fail=True)

    assert await dispatch_enrollment_notification(notifier, _notification()) is False
    assert "enrollment_notification_failed" in caplog.text


@pytest.mark.asyncio
async def test_dispatch_without_notifier():
    assert await dispatch_enrollment_notification(None, _notification()) is False


@pytest.mark.asyncio
async def test_logging_notifier(caplog):
    caplog.set_level("INFO", logger="app.modules.enrollments.notifications")
    await LoggingEnrollmentNotifier().notify_enrollment(_notification())
    assert "enrollment_notification" in caplog.text
