"""initial_schema

Revision ID: 1a2b3c4d5e6f
Revises:
Create Date: 2026-10-19

Creates:
- foods, meals, meal_food_items and symptoms tables (diary records)
- correlations table for food-symptom analysis results
"""
from alembic import op
import sqlalchemy as sa

revision = '1a2b3c4d5e6f'
down_revision = None
branch_labels = None
depends_on = None

SYMPTOM_TYPES = (
    'BLOATING', 'GAS_AND_FLATULENCE', 'STOMACH_PAIN', 'NAUSEA', 'DIARRHEA',
    'CONSTIPATION', 'HEARTBURN', 'INDIGESTION',
    'RASH', 'HIVES', 'ECZEMA_FLARE', 'ACNE', 'ITCHING', 'DRYNESS',
    'HEADACHE', 'MIGRAINE', 'BRAIN_FOG', 'DIZZINESS', 'FATIGUE', 'INSOMNIA',
    'CONGESTION', 'COUGHING', 'SHORTNESS_OF_BREATH', 'WHEEZING',
    'JOINT_PAIN', 'MUSCLE_ACHES', 'STIFFNESS', 'INFLAMMATION',
    'MOOD_CHANGES', 'ANXIETY', 'OTHER',
)


def upgrade() -> None:
    symptom_type = sa.Enum(*SYMPTOM_TYPES, name='symptomtype')

    op.create_table(
        'foods',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('category', sa.String(100), nullable=False),
        sa.Column('common_triggers', sa.JSON(), nullable=False),
        sa.Column('is_custom', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('idx_foods_name', 'foods', ['name'], unique=False)

    op.create_table(
        'meals',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('timestamp', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('meal_type', sa.String(20), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('location', sa.String(255), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('idx_meals_timestamp', 'meals', ['timestamp'], unique=False)

    op.create_table(
        'meal_food_items',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('meal_id', sa.Integer(), nullable=False),
        sa.Column('food_id', sa.Integer(), nullable=True),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('portion_size', sa.Float(), nullable=False),
        sa.Column('quantity', sa.String(255), nullable=True),
        sa.ForeignKeyConstraint(['meal_id'], ['meals.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['food_id'], ['foods.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('idx_meal_food_items_meal_id', 'meal_food_items', ['meal_id'], unique=False)
    op.create_index('idx_meal_food_items_food_id', 'meal_food_items', ['food_id'], unique=False)

    op.create_table(
        'symptoms',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('timestamp', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('symptom_type', symptom_type, nullable=False),
        sa.Column('severity', sa.Float(), nullable=False),
        sa.Column('duration_minutes', sa.Integer(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('idx_symptoms_timestamp', 'symptoms', ['timestamp'], unique=False)
    op.create_index('idx_symptoms_symptom_type', 'symptoms', ['symptom_type'], unique=False)

    op.create_table(
        'correlations',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('food_id', sa.Integer(), nullable=False),
        sa.Column('symptom_type', symptom_type, nullable=False),
        sa.Column('correlation_coefficient', sa.Float(), nullable=False),
        sa.Column('p_value', sa.Float(), nullable=False),
        sa.Column('sample_size', sa.Integer(), nullable=False),
        sa.Column('confidence_interval_lower', sa.Float(), nullable=False),
        sa.Column('confidence_interval_upper', sa.Float(), nullable=False),
        sa.Column('average_delay_hours', sa.Float(), nullable=False),
        sa.Column('delay_standard_deviation', sa.Float(), nullable=False),
        sa.Column('last_calculated', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['food_id'], ['foods.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_correlations_id'), 'correlations', ['id'], unique=False)
    op.create_index(op.f('ix_correlations_food_id'), 'correlations', ['food_id'], unique=False)
    op.create_index(op.f('ix_correlations_last_calculated'), 'correlations', ['last_calculated'], unique=False)
    op.create_index('idx_correlations_food_symptom', 'correlations', ['food_id', 'symptom_type'], unique=False)


def downgrade() -> None:
    op.drop_index('idx_correlations_food_symptom', table_name='correlations')
    op.drop_index(op.f('ix_correlations_last_calculated'), table_name='correlations')
    op.drop_index(op.f('ix_correlations_food_id'), table_name='correlations')
    op.drop_index(op.f('ix_correlations_id'), table_name='correlations')
    op.drop_table('correlations')

    op.drop_index('idx_symptoms_symptom_type', table_name='symptoms')
    op.drop_index('idx_symptoms_timestamp', table_name='symptoms')
    op.drop_table('symptoms')

    op.drop_index('idx_meal_food_items_food_id', table_name='meal_food_items')
    op.drop_index('idx_meal_food_items_meal_id', table_name='meal_food_items')
    op.drop_table('meal_food_items')

    op.drop_index('idx_meals_timestamp', table_name='meals')
    op.drop_table('meals')

    op.drop_index('idx_foods_name', table_name='foods')
    op.drop_table('foods')

    sa.Enum(name='symptomtype').drop(op.get_bind(), checkfirst=True)
