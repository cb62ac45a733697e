"""Workspace registry tests: creation, lookup, listing, settings, code rotation."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from sqlalchemy.orm import Session

from notespace.models import Workspace, WorkspaceMember, WorkspaceRole
from notespace.services.errors import ForbiddenError, NotFoundError, ValidationError
from notespace.services.workspace_registry import (
    INVITATION_CODE_LENGTH,
    create_workspace,
    generate_invitation_code,
    get_workspace,
    list_workspaces_for_user,
    rotate_invitation_code,
    update_workspace,
)
from tests.test_constants import ALICE_ID, BOB_ID, CAROL_ID


class TestCreateWorkspace:
    def test_creates_workspace_and_admin_membership(self, db: Session, users) -> None:
        ws = create_workspace(db, "Team Notes", "Shared drafts", ALICE_ID)

        assert ws.name == "Team Notes"
        assert ws.description == "Shared drafts"
        assert ws.created_by == ALICE_ID
        assert ws.allow_public_read is False
        assert ws.require_approval is True

        member = (
            db.query(WorkspaceMember)
            .filter(WorkspaceMember.workspace_id == ws.workspace_id)
            .one()
        )
        assert member.user_id == ALICE_ID
        assert member.role == WorkspaceRole.ADMIN.value
        assert member.invited_by == ALICE_ID

    def test_ids_are_unique(self, db: Session, users) -> None:
        ids = {create_workspace(db, f"W{i}", None, ALICE_ID).workspace_id for i in range(5)}
        assert len(ids) == 5

    def test_invitation_code_shape(self, db: Session, users) -> None:
        ws = create_workspace(db, "Team Notes", None, ALICE_ID)
        assert len(ws.invitation_code) == INVITATION_CODE_LENGTH
        assert ws.invitation_code == ws.invitation_code.upper()
        assert "-" not in ws.invitation_code

    def test_name_is_trimmed_and_description_defaults_empty(self, db: Session, users) -> None:
        ws = create_workspace(db, "  Team Notes  ", None, ALICE_ID)
        assert ws.name == "Team Notes"
        assert ws.description == ""

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_blank_name_rejected(self, db: Session, users, name) -> None:
        with pytest.raises(ValidationError):
            create_workspace(db, name, None, ALICE_ID)
        assert db.query(Workspace).count() == 0

    def test_unknown_creator_rejected(self, db: Session, users) -> None:
        with pytest.raises(ValidationError):
            create_workspace(db, "Team Notes", None, "uid_ghost")
        assert db.query(Workspace).count() == 0

    def test_failed_membership_write_rolls_back_workspace(self, db: Session, users) -> None:
        """Workspace and admin membership commit together or not at all."""
        real_commit = db.commit

        def failing_commit():
            raise RuntimeError("storage unavailable")

        with patch.object(db, "commit", side_effect=failing_commit):
            with pytest.raises(RuntimeError):
                create_workspace(db, "Team Notes", None, ALICE_ID)

        real_commit()
        assert db.query(Workspace).count() == 0
        assert db.query(WorkspaceMember).count() == 0


class TestGetWorkspace:
    def test_found(self, db: Session, workspace) -> None:
        assert get_workspace(db, workspace.workspace_id).name == "Team Notes"

    def test_missing(self, db: Session) -> None:
        with pytest.raises(NotFoundError):
            get_workspace(db, "missing")


class TestListWorkspaces:
    def test_includes_role_per_workspace(self, db: Session, workspace, add_member) -> None:
        other = create_workspace(db, "Bob's space", None, BOB_ID)
        add_member(workspace.workspace_id, BOB_ID, "read-only")

        result = {ws.workspace_id: role for ws, role in list_workspaces_for_user(db, BOB_ID)}
        assert result == {
            workspace.workspace_id: WorkspaceRole.READ_ONLY,
            other.workspace_id: WorkspaceRole.ADMIN,
        }

    def test_non_member_sees_nothing(self, db: Session, workspace) -> None:
        assert list_workspaces_for_user(db, CAROL_ID) == []

    def test_membership_to_vanished_workspace_is_dropped(
        self, db: Session, workspace, add_member
    ) -> None:
        add_member("vanished-workspace", ALICE_ID, "admin")
        result = list_workspaces_for_user(db, ALICE_ID)
        assert [ws.workspace_id for ws, _ in result] == [workspace.workspace_id]


class TestUpdateWorkspace:
    def test_writer_updates_settings(self, db: Session, workspace, add_member) -> None:
        add_member(workspace.workspace_id, BOB_ID, "read-write")
        ws = update_workspace(
            db,
            workspace.workspace_id,
            BOB_ID,
            allow_public_read=True,
            require_approval=False,
        )
        assert ws.settings == {"allow_public_read": True, "require_approval": False}
        assert ws.name == "Team Notes"

    def test_partial_update_keeps_other_fields(self, db: Session, workspace) -> None:
        ws = update_workspace(db, workspace.workspace_id, ALICE_ID, description="New")
        assert ws.description == "New"
        assert ws.name == "Team Notes"
        assert ws.require_approval is True

    def test_read_only_forbidden(self, db: Session, workspace, add_member) -> None:
        add_member(workspace.workspace_id, BOB_ID, "read-only")
        with pytest.raises(ForbiddenError):
            update_workspace(db, workspace.workspace_id, BOB_ID, allow_public_read=True)
        db.refresh(workspace)
        assert workspace.allow_public_read is False

    def test_blank_name_rejected(self, db: Session, workspace) -> None:
        with pytest.raises(ValidationError):
            update_workspace(db, workspace.workspace_id, ALICE_ID, name="  ")


class TestRotateInvitationCode:
    def test_admin_rotates(self, db: Session, workspace) -> None:
        before = workspace.invitation_code
        ws = rotate_invitation_code(db, workspace.workspace_id, ALICE_ID)
        assert ws.invitation_code != before
        assert len(ws.invitation_code) == INVITATION_CODE_LENGTH

    def test_read_write_cannot_rotate(self, db: Session, workspace, add_member) -> None:
        add_member(workspace.workspace_id, BOB_ID, "read-write")
        with pytest.raises(ForbiddenError):
            rotate_invitation_code(db, workspace.workspace_id, BOB_ID)

    def test_code_generator(self) -> None:
        code = generate_invitation_code()
        assert len(code) == INVITATION_CODE_LENGTH
        assert code.isupper() or code.isdigit()
