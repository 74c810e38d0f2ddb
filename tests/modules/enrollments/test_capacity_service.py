# -*- coding: utf-8 -*-
"""
tests/modules/enrollments/test_capacity_service.py

Regla de admisión: activo / lista de espera / bloqueo.

Autor: StudioHub
Fecha: 2026-10-17
"""

import pytest

from app.modules.enrollments.enums import AdmissionDecision, EnrollmentStatus
from app.modules.enrollments.services import is_program_full, resolve_admission
from tests.fakes import make_program


class TestIsProgramFull:

    def test_unlimited_program_is_never_full(self):
        program = make_program(capacity=None)
        assert is_program_full(program, 10_000) is False

    def test_zero_capacity_means_unlimited(self):
        program = make_program(capacity=0)
        assert is_program_full(program, 50) is False

    @pytest.mark.parametrize("active, expected", [(0, False), (2, False), (3, True), (4, True)])
    def test_capacity_threshold(self, active, expected):
        program = make_program(capacity=3)
        assert is_program_full(program, active) is expected

    def test_manual_override_closes_program(self):
        program = make_program(capacity=None, manual_full_override=True)
        assert is_program_full(program, 0) is True


class TestResolveAdmission:

    def test_admits_when_seats_left(self):
        program = make_program(capacity=2)
        assert resolve_admission(program, 1) is AdmissionDecision.ADMIT_ACTIVE

    def test_blocks_when_full_without_waitlist(self):
        program = make_program(capacity=1)
        assert resolve_admission(program, 1) is AdmissionDecision.BLOCK

    def test_waitlists_when_full_with_waitlist(self):
        program = make_program(capacity=1, waitlist_enabled=True)
        assert resolve_admission(program, 1) is AdmissionDecision.ADMIT_WAITLISTED

    def test_manual_override_without_capacity_blocks_even_with_waitlist(self):
        # Lista de espera solo aplica a programas con capacidad definida
        program = make_program(capacity=None, waitlist_enabled=True, manual_full_override=True)
        assert resolve_admission(program, 0) is AdmissionDecision.BLOCK

    def test_manual_override_with_capacity_waitlists(self):
        program = make_program(capacity=5, waitlist_enabled=True, manual_full_override=True)
        assert resolve_admission(program, 0) is AdmissionDecision.ADMIT_WAITLISTED

    def test_waitlist_accepted_overrides_fullness(self):
        program = make_program(capacity=1, manual_full_override=True)
        decision = resolve_admission(program, 5, EnrollmentStatus.WAITLIST_ACCEPTED)
        assert decision is AdmissionDecision.ADMIT_ACTIVE

    def test_existing_active_member_is_not_demoted(self):
        program = make_program(capacity=1)
        decision = resolve_admission(program, 1, EnrollmentStatus.ACTIVE)
        assert decision is AdmissionDecision.ADMIT_ACTIVE

    def test_waitlisted_member_stays_waitlisted_while_full(self):
        program = make_program(capacity=1, waitlist_enabled=True)
        decision = resolve_admission(program, 1, EnrollmentStatus.WAITLISTED)
        assert decision is AdmissionDecision.ADMIT_WAITLISTED
