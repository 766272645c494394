import uuid

import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='StoredFile',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('storage_key', models.CharField(help_text='Generated key of the raw file in the blob store.', max_length=255, unique=True)),
                ('original_name', models.CharField(help_text='Client-supplied filename. Untrusted.', max_length=255)),
                ('mimetype', models.CharField(max_length=255)),
                ('size_bytes', models.PositiveBigIntegerField()),
                ('uploaded_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now, editable=False)),
            ],
            options={
                'ordering': ['-uploaded_at'],
            },
        ),
    ]
