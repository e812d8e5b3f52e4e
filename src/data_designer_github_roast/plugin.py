from data_designer.plugins.plugin import Plugin, PluginType

github_roast_plugin = Plugin(
    config_qualified_name="data_designer_github_roast.config.GitHubRoastColumnConfig",
    impl_qualified_name="data_designer_github_roast.generator.GitHubRoastColumnGenerator",
    plugin_type=PluginType.COLUMN_GENERATOR,
)
