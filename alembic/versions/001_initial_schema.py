"""initial_schema

Revision ID: 001_initial
Revises:
Create Date: 2026-10-18 00:00:00

Create apps, app_settings, events, analytics_sessions, daily_stats
and custom_events tables.
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '001_initial'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'apps',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('app_id', sa.String(64), nullable=False),
        sa.Column('user_id', sa.String(200), nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_apps_app_id', 'apps', ['app_id'], unique=True)
    op.create_index('ix_apps_user_id', 'apps', ['user_id'])

    op.create_table(
        'app_settings',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('app_id', sa.Uuid(), nullable=False, unique=True),
        sa.Column('meta_pixel_id', sa.String(100), nullable=True),
        sa.Column('meta_access_token', sa.String(1000), nullable=True),
        sa.Column('meta_test_event_code', sa.String(100), nullable=True),
        sa.Column('meta_pixel_enabled', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('meta_verified', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('auto_track_pageviews', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('auto_track_clicks', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('auto_track_scroll', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('record_ip', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('record_location', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('record_session', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['app_id'], ['apps.id'], ),
    )

    op.create_table(
        'events',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('app_id', sa.Uuid(), nullable=False),
        sa.Column('event_name', sa.String(100), nullable=False),
        sa.Column('url', sa.Text(), nullable=True),
        sa.Column('referrer', sa.Text(), nullable=True),
        sa.Column('page_title', sa.String(500), nullable=True),
        sa.Column('session_id', sa.String(100), nullable=True),
        sa.Column('fingerprint', sa.String(200), nullable=True),
        sa.Column('ip_address', sa.String(64), nullable=True),
        sa.Column('user_agent', sa.Text(), nullable=True),
        sa.Column('browser', sa.String(100), nullable=True),
        sa.Column('browser_version', sa.String(50), nullable=True),
        sa.Column('os', sa.String(100), nullable=True),
        sa.Column('os_version', sa.String(50), nullable=True),
        sa.Column('device_type', sa.String(20), nullable=True),
        sa.Column('screen_width', sa.Integer(), nullable=True),
        sa.Column('screen_height', sa.Integer(), nullable=True),
        sa.Column('city', sa.String(100), nullable=True),
        sa.Column('region', sa.String(100), nullable=True),
        sa.Column('country', sa.String(100), nullable=True),
        sa.Column('country_code', sa.String(10), nullable=True),
        sa.Column('timezone', sa.String(64), nullable=True),
        sa.Column('utm_source', sa.String(200), nullable=True),
        sa.Column('utm_medium', sa.String(200), nullable=True),
        sa.Column('utm_campaign', sa.String(200), nullable=True),
        sa.Column('utm_term', sa.String(200), nullable=True),
        sa.Column('utm_content', sa.String(200), nullable=True),
        sa.Column('value', sa.Float(), nullable=True),
        sa.Column('currency', sa.String(10), nullable=True),
        sa.Column('product_id', sa.String(100), nullable=True),
        sa.Column('product_name', sa.String(500), nullable=True),
        sa.Column('quantity', sa.Integer(), nullable=True),
        sa.Column('custom_data', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['app_id'], ['apps.id'], ),
    )
    op.create_index('ix_events_app_id', 'events', ['app_id'])
    op.create_index('ix_events_event_name', 'events', ['event_name'])
    op.create_index('ix_events_session_id', 'events', ['session_id'])
    op.create_index('ix_events_created_at', 'events', ['created_at'])
    # Event query API: filter by app + name, order by app + date
    op.create_index('idx_events_app_name', 'events', ['app_id', 'event_name'])
    op.create_index('idx_events_app_date', 'events', ['app_id', 'created_at'])

    op.create_table(
        'analytics_sessions',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('app_id', sa.Uuid(), nullable=False),
        sa.Column('session_id', sa.String(100), nullable=False, unique=True),
        sa.Column('fingerprint', sa.String(200), nullable=True),
        sa.Column('ip_address', sa.String(64), nullable=True),
        sa.Column('user_agent', sa.Text(), nullable=True),
        sa.Column('browser', sa.String(100), nullable=True),
        sa.Column('os', sa.String(100), nullable=True),
        sa.Column('device_type', sa.String(20), nullable=True),
        sa.Column('country', sa.String(100), nullable=True),
        sa.Column('pageviews', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('start_time', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('last_seen', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['app_id'], ['apps.id'], ),
    )
    op.create_index('ix_analytics_sessions_app_id', 'analytics_sessions', ['app_id'])

    op.create_table(
        'daily_stats',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('app_id', sa.Uuid(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('pageviews', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('unique_users', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('sessions', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['app_id'], ['apps.id'], ),
        sa.UniqueConstraint('app_id', 'date', name='uq_daily_stats_app_date'),
    )

    op.create_table(
        'custom_events',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('app_id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('display_name', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('selector', sa.String(500), nullable=True),
        sa.Column('event_type', sa.String(50), nullable=False, server_default='click'),
        sa.Column('meta_event_name', sa.String(100), nullable=True),
        sa.Column('has_product_id', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['app_id'], ['apps.id'], ),
    )
    op.create_index('ix_custom_events_app_id', 'custom_events', ['app_id'])


def downgrade():
    op.drop_index('ix_custom_events_app_id', table_name='custom_events')
    op.drop_table('custom_events')
    op.drop_table('daily_stats')
    op.drop_index('ix_analytics_sessions_app_id', table_name='analytics_sessions')
    op.drop_table('analytics_sessions')
    op.drop_index('idx_events_app_date', table_name='events')
    op.drop_index('idx_events_app_name', table_name='events')
    op.drop_index('ix_events_created_at', table_name='events')
    op.drop_index('ix_events_session_id', table_name='events')
    op.drop_index('ix_events_event_name', table_name='events')
    op.drop_index('ix_events_app_id', table_name='events')
    op.drop_table('events')
    op.drop_table('app_settings')
    op.drop_index('ix_apps_user_id', table_name='apps')
    op.drop_index('ix_apps_app_id', table_name='apps')
    op.drop_table('apps')
