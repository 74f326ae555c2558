"""proveedores_retenciones

Crea las tablas de proveedores, empresas, catálogo de conceptos de
retención, plan de cuentas, regímenes tributarios y usuarios.

Revision ID: c3d8f1a27e40
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = 'c3d8f1a27e40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        'regimen_tributario',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('codigo', sa.String(30), nullable=False, unique=True),
        sa.Column('nombre', sa.String(100), nullable=False),
        sa.Column('es_declarante', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('aplica_iva', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('activo', sa.Boolean(), nullable=False, server_default=sa.true()),
    )

    op.create_table(
        'cuenta_contable',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('codigo', sa.String(20), nullable=False, unique=True),
        sa.Column('nombre', sa.String(200), nullable=False),
        sa.Column('tipo', sa.String(20), nullable=False),
        sa.Column('nivel', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('padre_codigo', sa.String(20), nullable=True),
        sa.Column('activo', sa.Boolean(), nullable=False, server_default=sa.true()),
    )

    op.create_table(
        'concepto_retencion',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('codigo', sa.String(3), nullable=False, unique=True),
        sa.Column('nombre', sa.String(100), nullable=False),
        sa.Column('base_minima', sa.Numeric(15, 2), nullable=False, server_default='0'),
        sa.Column('tarifa', sa.Numeric(5, 2), nullable=False),
        sa.Column('cuenta_contable', sa.String(20), nullable=True),
        sa.Column('activo', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.CheckConstraint('tarifa >= 0 AND tarifa <= 100', name='ck_concepto_tarifa'),
        sa.CheckConstraint('base_minima >= 0', name='ck_concepto_base_minima'),
    )

    op.create_table(
        'empresa',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('numero_documento', sa.String(20), nullable=False, unique=True),
        sa.Column('digito_verificacion', sa.String(1), nullable=True),
        sa.Column('nombre', sa.String(300), nullable=False),
        sa.Column('regimen_tributario_id', sa.Integer(), sa.ForeignKey('regimen_tributario.id'), nullable=True),
        sa.Column('es_agente_retenedor', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('municipio', sa.String(100), nullable=True),
        sa.Column('activo', sa.Boolean(), nullable=False, server_default=sa.true()),
    )

    op.create_table(
        'proveedor',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('tipo_documento', sa.String(5), nullable=False, server_default='NIT'),
        sa.Column('numero_documento', sa.String(20), nullable=False, unique=True),
        sa.Column('digito_verificacion', sa.String(1), nullable=True),
        sa.Column('nombre', sa.String(300), nullable=False),
        sa.Column('email', sa.String(200), nullable=True),
        sa.Column('telefono', sa.String(50), nullable=True),
        sa.Column('direccion', sa.String(500), nullable=True),
        sa.Column('ciudad_codigo', sa.String(5), nullable=True),
        sa.Column('ciudad', sa.String(100), nullable=True),
        sa.Column('departamento_codigo', sa.String(2), nullable=True),
        sa.Column('departamento', sa.String(100), nullable=True),
        sa.Column('contacto_principal', sa.String(200), nullable=True),
        sa.Column('plazo_pago_dias', sa.Integer(), nullable=False, server_default='30'),
        sa.Column('regimen_tributario_id', sa.Integer(), sa.ForeignKey('regimen_tributario.id'), nullable=True),
        sa.Column('responsabilidad_iva', sa.String(20), nullable=False, server_default='RESPONSABLE'),
        sa.Column('autoretenedor', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('declarante_renta', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('tipo_persona', sa.String(10), nullable=False, server_default='JURIDICA'),
        sa.Column('tipo_transaccion_principal', sa.String(10), nullable=False, server_default='AMBOS'),
        sa.Column('inscrito_ica_local', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('activo', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index('ix_proveedor_nombre', 'proveedor', ['nombre'])

    op.create_table(
        'proveedor_concepto',
        sa.Column('proveedor_id', sa.Integer(), sa.ForeignKey('proveedor.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('concepto_id', sa.Integer(), sa.ForeignKey('concepto_retencion.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('tipo_transaccion', sa.String(10), primary_key=True),
        sa.Column('orden', sa.Integer(), nullable=False, server_default='1'),
    )

    op.create_table(
        'usuario',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('username', sa.String(100), nullable=False, unique=True),
        sa.Column('email', sa.String(200), nullable=False, unique=True),
        sa.Column('password_hash', sa.String(200), nullable=False),
        sa.Column('nombre_completo', sa.String(300), nullable=True),
        sa.Column('rol', sa.String(50), nullable=True),
        sa.Column('empresa_id', sa.Integer(), sa.ForeignKey('empresa.id'), nullable=True),
        sa.Column('activo', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('ultimo_acceso', sa.DateTime(), nullable=True),
        *_timestamps(),
    )


def downgrade() -> None:
    op.drop_table('usuario')
    op.drop_table('proveedor_concepto')
    op.drop_index('ix_proveedor_nombre', table_name='proveedor')
    op.drop_table('proveedor')
    op.drop_table('empresa')
    op.drop_table('concepto_retencion')
    op.drop_table('cuenta_contable')
    op.drop_table('regimen_tributario')
