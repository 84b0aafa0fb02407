from django.db import migrations, models
import django.db.models.deletion
import uuid
import websites.models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('organizations', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Website',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, help_text='Unique identifier for the website', primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=255)),
                ('domain', models.CharField(help_text='Domain the tracking script is embedded on (e.g. example.com)', max_length=255)),
                ('api_key', models.CharField(default=websites.models.generate_api_key, editable=False, help_text='Public key sent by the tracking client with every event', max_length=128, unique=True)),
                ('is_active', models.BooleanField(db_index=True, default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('organization', models.ForeignKey(help_text='Organization that owns this website', on_delete=django.db.models.deletion.CASCADE, related_name='websites', to='organizations.organization')),
            ],
            options={
                'verbose_name': 'Website',
                'verbose_name_plural': 'Websites',
                'ordering': ['-created_at'],
            },
        ),
    ]
