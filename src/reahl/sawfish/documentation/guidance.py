COMMON_INTERFACES = (
    ('ISldWorks', 'Top-level application interface. Access to documents, settings, and application operations.'),
    ('IModelDoc2', 'Base interface for all document types (parts, assemblies, drawings). Document-level operations.'),
    ('IModelDocExtension', 'Extended document operations including selection, custom properties, and advanced features.'),
    ('IPartDoc', 'Part-specific operations like bodies, materials, and part features.'),
    ('IAssemblyDoc', 'Assembly operations including components, mates, and assembly features.'),
    ('IDrawingDoc', 'Drawing-specific operations like sheets, views, and annotations.'),
    ('ISketchManager', 'Sketch creation and management. Add lines, circles, arcs, and other sketch entities.'),
    ('IFeatureManager', 'Create and manage features like extrusions, cuts, fillets, patterns, etc.'),
    ('ISelectionMgr', 'Selection management. Select entities, get selected objects, and manipulate selections.'),
    ('IFeature', 'Individual feature object. Access feature properties, suppression state, and feature data.'),
    ('ISketch', 'Sketch object. Access sketch segments, points, and relations.'),
    ('IBody2', 'Solid or surface body. Access faces, edges, and body properties.'),
    ('IFace2', 'Face of a body. Access edges, surface properties, and face operations.'),
    ('IEdge', 'Edge of a face or body. Access vertices, curves, and edge properties.'),
    ('IMate2', 'Mate constraint in assembly. Define relationships between components.'),
    ('IComponent2', 'Assembly component. Access component properties, transform, and suppression.'),
    ('IConfiguration', 'Configuration object. Manage design variations and configurations.'),
    ('IDimension', 'Dimension object. Access and modify dimension values.'),
    ('IDisplayDimension', 'Display dimension properties and appearance.'),
)

WORKFLOWS = {
    'part': {
        'workflow': 'Creating a Part',
        'steps': [
            '1. Create new part: ISldWorks.NewDocument()',
            '2. Select a plane: IModelDocExtension.SelectByID2("Front Plane", "PLANE", ...)',
            '3. Create sketch: ISketchManager.InsertSketch()',
            '4. Add sketch geometry: ISketchManager.CreateLine(), CreateCircle(), etc.',
            '5. Exit sketch: ISketchManager.InsertSketch(true)',
            '6. Create feature: IFeatureManager.FeatureExtrusion2()',
            '7. Save document: IModelDoc2.Save3()',
        ],
        'commonInterfaces': ['ISldWorks', 'IModelDoc2', 'ISketchManager', 'IFeatureManager'],
    },
    'assembly': {
        'workflow': 'Creating an Assembly',
        'steps': [
            '1. Create new assembly: ISldWorks.NewDocument()',
            '2. Add components: IAssemblyDoc.AddComponent5()',
            '3. Position components: IComponent2.Transform2',
            '4. Add mates: IAssemblyDoc.AddMate5()',
            '5. Save assembly: IModelDoc2.Save3()',
        ],
        'commonInterfaces': ['ISldWorks', 'IAssemblyDoc', 'IComponent2', 'IMate2'],
    },
    'sketch': {
        'workflow': 'Working with Sketches',
        'steps': [
            '1. Get sketch manager: IModelDoc2.SketchManager',
            '2. Select plane or face: IModelDocExtension.SelectByID2()',
            '3. Insert sketch: ISketchManager.InsertSketch()',
            '4. Create geometry: CreateLine(), CreateCircle(), CreateRectangle(), etc.',
            '5. Add constraints: ISketch.AddConstraints()',
            '6. Add dimensions: ISketchManager.CreateDimension()',
            '7. Exit sketch: ISketchManager.InsertSketch(true)',
        ],
        'commonInterfaces': ['ISketchManager', 'ISketch', 'ISketchSegment'],
    },
    'feature': {
        'workflow': 'Creating Features',
        'steps': [
            '1. Ensure sketch or geometry is selected',
            '2. Get feature manager: IModelDoc2.FeatureManager',
            '3. Call feature method: FeatureExtrusion2(), FeatureCut4(), FeatureFillet3(), etc.',
            '4. Access feature data if needed: IFeature.GetDefinition()',
            '5. Modify and update: IFeatureDefinition.AccessSelections(), ReleaseSelectionAccess()',
        ],
        'commonInterfaces': ['IFeatureManager', 'IFeature', 'IExtrudeFeatureData2', 'IFilletFeatureData'],
    },
    'selection': {
        'workflow': 'Selection and Object Access',
        'steps': [
            '1. Select by ID: IModelDocExtension.SelectByID2(name, type, x, y, z, ...)',
            '2. Or select by ray: IModelDocExtension.SelectByRay()',
            '3. Get selection manager: IModelDoc2.SelectionManager',
            '4. Get selected objects: ISelectionMgr.GetSelectedObject6()',
            '5. Get selection type: ISelectionMgr.GetSelectedObjectType3()',
            '6. Process selected objects',
            '7. Clear selection: IModelDoc2.ClearSelection2()',
        ],
        'commonInterfaces': ['IModelDocExtension', 'ISelectionMgr'],
    },
    'drawing': {
        'workflow': 'Creating a Drawing',
        'steps': [
            '1. Create drawing: ISldWorks.NewDocument()',
            '2. Get drawing doc: IDrawingDoc',
            '3. Create sheet: IDrawingDoc.CreateDrawViewFromModelView3()',
            '4. Add views: IDrawingDoc.CreateDrawViewFromModelView3()',
            '5. Add annotations: IDrawingDoc.InsertNote(), InsertDimension()',
            '6. Save drawing: IModelDoc2.Save3()',
        ],
        'commonInterfaces': ['IDrawingDoc', 'IView', 'ISheet', 'INote', 'IDisplayDimension'],
    },
}


def common_interfaces():
    return [
        {'name': interface_name, 'purpose': purpose}
        for interface_name, purpose in COMMON_INTERFACES
    ]


def available_workflow_types():
    return list(WORKFLOWS.keys())


def workflow_guidance(workflow_type):
    return WORKFLOWS.get(workflow_type.strip().lower())
