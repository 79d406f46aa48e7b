
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001_initial'
down_revision = None
branch_labels = None
depends_on = None

ACTIVE_ONLY = sa.text("status = 'active'")

def upgrade():
    op.create_table(
        'turnos',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('time', sa.Time(), nullable=False),
        sa.Column('customer_name', sa.String(length=120), nullable=False),
        sa.Column('customer_email', sa.String(length=255), nullable=False),
        sa.Column('status', sa.String(length=16), nullable=False, server_default='active'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("status IN ('active', 'cancelled')", name='turno_status'),
    )
    op.create_index(
        'uq_turnos_active_slot', 'turnos', ['date', 'time'], unique=True,
        postgresql_where=ACTIVE_ONLY, sqlite_where=ACTIVE_ONLY,
    )
    op.create_index('ix_turnos_date', 'turnos', ['date'])
    op.create_index('ix_turnos_status', 'turnos', ['status'])
    op.create_index('ix_turnos_date_time_status', 'turnos', ['date', 'time', 'status'])

def downgrade():
    op.drop_index('ix_turnos_date_time_status', table_name='turnos')
    op.drop_index('ix_turnos_status', table_name='turnos')
    op.drop_index('ix_turnos_date', table_name='turnos')
    op.drop_index('uq_turnos_active_slot', table_name='turnos')
    op.drop_table('turnos')
