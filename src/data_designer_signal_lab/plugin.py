from data_designer.plugins.plugin import Plugin, PluginType

signal_lab_plugin = Plugin(
    config_qualified_name="data_designer_signal_lab.config.SignalLabColumnConfig",
    impl_qualified_name="data_designer_signal_lab.generator.SignalLabColumnGenerator",
    plugin_type=PluginType.COLUMN_GENERATOR,
)
