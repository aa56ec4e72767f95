"""Initial migration - create all tables

Revision ID: 001_initial
Revises:
Create Date: 2025-01-01 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ID = sa.String(36)


def _timestamps() -> list:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    # Users
    op.create_table(
        'users',
        sa.Column('id', ID, nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password', sa.String(255), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email')
    )
    op.create_index('ix_users_created_at', 'users', ['created_at'])

    # Chats
    op.create_table(
        'chats',
        sa.Column('id', ID, nullable=False),
        sa.Column('user_id', ID, nullable=False),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('visibility', sa.String(16), nullable=False, server_default='private'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'])
    )
    op.create_index('ix_chats_user_id', 'chats', ['user_id'])
    op.create_index('ix_chats_created_at', 'chats', ['created_at'])

    # Messages
    op.create_table(
        'chat_messages',
        sa.Column('id', ID, nullable=False),
        sa.Column('chat_id', ID, nullable=False),
        sa.Column('user_id', ID, nullable=True),
        sa.Column('role', sa.String(20), nullable=False),
        sa.Column('content', postgresql.JSONB(), nullable=False),
        sa.Column('attachments', postgresql.JSONB(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['chat_id'], ['chats.id']),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'])
    )
    op.create_index('ix_chat_messages_chat_id', 'chat_messages', ['chat_id'])
    op.create_index('ix_chat_messages_user_id', 'chat_messages', ['user_id'])
    op.create_index('ix_chat_messages_created_at', 'chat_messages', ['created_at'])

    # Votes
    op.create_table(
        'chat_votes',
        sa.Column('id', ID, nullable=False),
        sa.Column('chat_id', ID, nullable=False),
        sa.Column('message_id', ID, nullable=False),
        sa.Column('is_upvoted', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['chat_id'], ['chats.id']),
        sa.ForeignKeyConstraint(['message_id'], ['chat_messages.id'])
    )
    op.create_index('ix_chat_votes_chat_id', 'chat_votes', ['chat_id'])
    op.create_index('ix_chat_votes_message_id', 'chat_votes', ['message_id'])
    op.create_index('ix_chat_votes_created_at', 'chat_votes', ['created_at'])

    # Streams
    op.create_table(
        'stream',
        sa.Column('id', ID, nullable=False),
        sa.Column('chat_id', ID, nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['chat_id'], ['chats.id'], ondelete='CASCADE')
    )
    op.create_index('ix_stream_chat_id', 'stream', ['chat_id'])
    op.create_index('ix_stream_created_at', 'stream', ['created_at'])

    # Document versions
    op.create_table(
        'chat_documents',
        sa.Column('id', ID, nullable=False),
        sa.Column('document_id', ID, nullable=False),
        sa.Column('chat_id', ID, nullable=True),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('kind', sa.String(16), nullable=False, server_default='text'),
        sa.Column('content', sa.Text(), nullable=True),
        sa.Column('user_id', ID, nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('document_id', 'created_at', name='uq_chat_documents_version'),
        sa.ForeignKeyConstraint(['chat_id'], ['chats.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'])
    )
    op.create_index('ix_chat_documents_document_id', 'chat_documents', ['document_id'])
    op.create_index('ix_chat_documents_chat_id', 'chat_documents', ['chat_id'])
    op.create_index('ix_chat_documents_created_at', 'chat_documents', ['created_at'])

    # Suggestions
    op.create_table(
        'chat_suggestions',
        sa.Column('id', ID, nullable=False),
        sa.Column('document_id', ID, nullable=False),
        sa.Column('document_created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('original_text', sa.Text(), nullable=False),
        sa.Column('suggested_text', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('is_resolved', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('user_id', ID, nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['document_id', 'document_created_at'],
            ['chat_documents.document_id', 'chat_documents.created_at'],
            name='fk_chat_suggestions_document_version'
        ),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'])
    )
    op.create_index('ix_chat_suggestions_document_id', 'chat_suggestions', ['document_id'])
    op.create_index('ix_chat_suggestions_created_at', 'chat_suggestions', ['created_at'])

    # Knowledge uploads and documents
    op.create_table(
        'knowledge_docs_upload',
        sa.Column('id', ID, nullable=False),
        sa.Column('filename', sa.String(255), nullable=False),
        sa.Column('mime_type', sa.String(100), nullable=True),
        sa.Column('filesize', sa.Integer(), nullable=True),
        sa.Column('url', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_knowledge_docs_upload_created_at', 'knowledge_docs_upload', ['created_at'])

    op.create_table(
        'knowledge_docs',
        sa.Column('id', ID, nullable=False),
        sa.Column('type', sa.String(16), nullable=False, server_default='raw'),
        sa.Column('url', sa.Text(), nullable=True),
        sa.Column('file_id', ID, nullable=True),
        sa.Column('title', sa.Text(), nullable=True),
        sa.Column('status', sa.String(16), nullable=False, server_default='pending'),
        sa.Column('content', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['file_id'], ['knowledge_docs_upload.id'], ondelete='SET NULL')
    )
    op.create_index('ix_knowledge_docs_status', 'knowledge_docs', ['status'])
    op.create_index('ix_knowledge_docs_created_at', 'knowledge_docs', ['created_at'])


def downgrade() -> None:
    op.drop_table('knowledge_docs')
    op.drop_table('knowledge_docs_upload')
    op.drop_table('chat_suggestions')
    op.drop_table('chat_documents')
    op.drop_table('stream')
    op.drop_table('chat_votes')
    op.drop_table('chat_messages')
    op.drop_table('chats')
    op.drop_table('users')
