import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('blocks', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='ProgressRecord',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('percentage', models.PositiveSmallIntegerField(blank=True, null=True)),
                ('time_modified', models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ('block_instance', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='progress_records', to='blocks.blockinstance')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='progress_records', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'progress record',
                'verbose_name_plural': 'progress records',
                'constraints': [models.UniqueConstraint(fields=('block_instance', 'user'), name='unique_progress_record')],
            },
        ),
    ]
