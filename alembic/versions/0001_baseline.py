"""Baseline migration - users, moderation, calendar and audit tables

Revision ID: 0001_baseline
Revises:
Create Date: 2026-10-17

Creates every table the admin console reads or writes.
"""
from typing import Sequence, Union

from alembic import op


# revision identifiers, used by Alembic.
revision: str = '0001_baseline'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create admin console tables."""

    op.execute('CREATE EXTENSION IF NOT EXISTS pgcrypto')  # For gen_random_uuid()

    # ==========================================================================
    # Users
    # ==========================================================================
    op.execute('''
        CREATE TABLE users (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            email VARCHAR(255) UNIQUE NOT NULL,
            role VARCHAR(20) NOT NULL DEFAULT 'USER',
            email_verified BOOLEAN NOT NULL DEFAULT false,
            locale VARCHAR(10) NOT NULL DEFAULT 'zh',
            subscription_plan VARCHAR(20) NOT NULL DEFAULT 'FREE',
            is_banned BOOLEAN NOT NULL DEFAULT false,
            banned_until TIMESTAMPTZ,
            ban_reason VARCHAR(500),
            last_active_at TIMESTAMPTZ,
            token_version INTEGER NOT NULL DEFAULT 1,
            deleted_at TIMESTAMPTZ,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
    ''')
    op.execute('CREATE INDEX idx_users_role_created ON users(role, created_at)')
    op.execute('CREATE INDEX idx_users_deleted_at ON users(deleted_at)')

    # ==========================================================================
    # Schools and deadlines
    # ==========================================================================
    op.execute('''
        CREATE TABLE schools (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            name VARCHAR(255) NOT NULL,
            name_zh VARCHAR(255),
            created_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
    ''')

    op.execute('''
        CREATE TABLE school_deadlines (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            school_id UUID NOT NULL REFERENCES schools(id) ON DELETE CASCADE,
            year INTEGER NOT NULL,
            round VARCHAR(20) NOT NULL,
            application_deadline DATE NOT NULL,
            financial_aid_deadline DATE,
            decision_date DATE,
            essay_prompts JSONB,
            essay_count INTEGER,
            interview_required BOOLEAN NOT NULL DEFAULT false,
            interview_deadline DATE,
            application_fee INTEGER,
            notes TEXT,
            source VARCHAR(20) NOT NULL DEFAULT 'MANUAL',
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            CONSTRAINT uq_school_deadline_round UNIQUE (school_id, year, round)
        )
    ''')
    op.execute('''
        CREATE INDEX idx_school_deadlines_year_deadline
        ON school_deadlines(year, application_deadline)
    ''')

    # ==========================================================================
    # Global events
    # ==========================================================================
    op.execute('''
        CREATE TABLE global_events (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            title VARCHAR(255) NOT NULL,
            title_zh VARCHAR(255),
            category VARCHAR(30) NOT NULL,
            event_date DATE NOT NULL,
            registration_deadline DATE,
            late_deadline DATE,
            result_date DATE,
            description TEXT,
            description_zh TEXT,
            url VARCHAR(500),
            year INTEGER NOT NULL,
            is_recurring BOOLEAN NOT NULL DEFAULT true,
            is_active BOOLEAN NOT NULL DEFAULT true,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
    ''')
    op.execute('CREATE INDEX idx_global_events_year_date ON global_events(year, event_date)')
    op.execute('CREATE INDEX idx_global_events_category ON global_events(category)')

    # ==========================================================================
    # User activity (counted by the dashboard)
    # ==========================================================================
    op.execute('''
        CREATE TABLE admission_cases (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            user_id UUID NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            school_id UUID REFERENCES schools(id) ON DELETE SET NULL,
            year INTEGER NOT NULL,
            round VARCHAR(20),
            result VARCHAR(20) NOT NULL,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
    ''')

    op.execute('''
        CREATE TABLE reviews (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            reviewer_id UUID NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            overall_score INTEGER NOT NULL,
            comment TEXT,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
    ''')

    op.execute('''
        CREATE TABLE forum_posts (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            author_id UUID NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            title VARCHAR(255) NOT NULL,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
    ''')

    op.execute('''
        CREATE TABLE conversations (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            created_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
    ''')

    op.execute('''
        CREATE TABLE messages (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            conversation_id UUID NOT NULL REFERENCES conversations(id) ON DELETE CASCADE,
            sender_id UUID NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            content TEXT NOT NULL,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
    ''')

    op.execute('''
        CREATE TABLE verification_requests (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            user_id UUID NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            status VARCHAR(20) NOT NULL DEFAULT 'PENDING',
            created_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
    ''')

    op.execute('''
        CREATE TABLE payments (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            user_id UUID NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            amount NUMERIC(12, 2) NOT NULL,
            status VARCHAR(20) NOT NULL DEFAULT 'PENDING',
            paid_at TIMESTAMPTZ,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
    ''')
    op.execute('CREATE INDEX idx_payments_status_created ON payments(status, created_at)')

    # ==========================================================================
    # Reports
    # ==========================================================================
    op.execute('''
        CREATE TABLE reports (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            reporter_id UUID NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            target_type VARCHAR(20) NOT NULL,
            target_id VARCHAR(64) NOT NULL,
            reason VARCHAR(255) NOT NULL,
            detail TEXT,
            context JSONB,
            status VARCHAR(20) NOT NULL DEFAULT 'PENDING',
            resolution TEXT,
            reviewed_by UUID REFERENCES users(id) ON DELETE SET NULL,
            reviewed_at TIMESTAMPTZ,
            resolved_at TIMESTAMPTZ,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
    ''')
    op.execute('CREATE INDEX idx_reports_status_created ON reports(status, created_at)')
    op.execute('CREATE INDEX idx_reports_target ON reports(target_type, target_id)')

    # ==========================================================================
    # Audit logs
    # ==========================================================================
    op.execute('''
        CREATE TABLE audit_logs (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            user_id UUID REFERENCES users(id) ON DELETE SET NULL,
            action VARCHAR(50) NOT NULL,
            resource VARCHAR(50) NOT NULL,
            resource_id VARCHAR(64),
            metadata JSONB,
            ip_address VARCHAR(45),
            user_agent VARCHAR(500),
            prev_hash VARCHAR(64),
            entry_hash VARCHAR(64),
            created_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
    ''')
    op.execute('CREATE INDEX idx_audit_created ON audit_logs(created_at)')
    op.execute('CREATE INDEX idx_audit_actor_created ON audit_logs(user_id, created_at)')
    op.execute('CREATE INDEX idx_audit_action_created ON audit_logs(action, created_at)')
    op.execute('CREATE INDEX idx_audit_resource ON audit_logs(resource, resource_id)')


def downgrade() -> None:
    """Drop admin console tables."""
    op.execute('DROP TABLE IF EXISTS audit_logs CASCADE')
    op.execute('DROP TABLE IF EXISTS reports CASCADE')
    op.execute('DROP TABLE IF EXISTS payments CASCADE')
    op.execute('DROP TABLE IF EXISTS verification_requests CASCADE')
    op.execute('DROP TABLE IF EXISTS messages CASCADE')
    op.execute('DROP TABLE IF EXISTS conversations CASCADE')
    op.execute('DROP TABLE IF EXISTS forum_posts CASCADE')
    op.execute('DROP TABLE IF EXISTS reviews CASCADE')
    op.execute('DROP TABLE IF EXISTS admission_cases CASCADE')
    op.execute('DROP TABLE IF EXISTS global_events CASCADE')
    op.execute('DROP TABLE IF EXISTS school_deadlines CASCADE')
    op.execute('DROP TABLE IF EXISTS schools CASCADE')
    op.execute('DROP TABLE IF EXISTS users CASCADE')
