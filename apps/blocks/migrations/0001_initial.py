import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='BlockInstance',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('blockname', models.CharField(db_index=True, max_length=40)),
                ('parent_context_level', models.CharField(choices=[('system', 'System'), ('user', 'User'), ('course', 'Course'), ('module', 'Activity module')], default='course', max_length=10)),
                ('parent_instance_id', models.PositiveBigIntegerField(help_text='Id of the parent context instance (course id for course blocks)')),
                ('configdata', models.TextField(blank=True, default='', help_text='base64-encoded JSON block configuration')),
                ('time_created', models.DateTimeField(auto_now_add=True)),
                ('time_modified', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'block instance',
                'verbose_name_plural': 'block instances',
                'ordering': ['id'],
                'indexes': [models.Index(fields=['parent_context_level', 'parent_instance_id'], name='blocks_parent_context_idx')],
            },
        ),
        migrations.CreateModel(
            name='BlockPosition',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('pagetype', models.CharField(help_text='Page type pattern, e.g. course-view-topics', max_length=64)),
                ('visible', models.BooleanField(default=True)),
                ('region', models.CharField(blank=True, default='', max_length=16)),
                ('weight', models.IntegerField(default=0)),
                ('block_instance', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='positions', to='blocks.blockinstance')),
            ],
            options={
                'verbose_name': 'block position',
                'verbose_name_plural': 'block positions',
                'ordering': ['block_instance', 'pagetype'],
            },
        ),
        migrations.CreateModel(
            name='CapabilityOverride',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('role', models.CharField(choices=[('student', 'Student'), ('teacher', 'Non-editing teacher'), ('editingteacher', 'Teacher'), ('manager', 'Manager'), ('guest', 'Guest')], max_length=20)),
                ('capability', models.CharField(max_length=100)),
                ('allow', models.BooleanField(help_text='True allows the capability, False prohibits it')),
                ('block_instance', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='capability_overrides', to='blocks.blockinstance')),
            ],
            options={
                'verbose_name': 'capability override',
                'verbose_name_plural': 'capability overrides',
                'constraints': [models.UniqueConstraint(fields=('block_instance', 'role', 'capability'), name='unique_block_capability_override')],
            },
        ),
    ]
